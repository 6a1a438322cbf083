from __future__ import annotations
from pathlib import Path
import logging
import threading
import time
import typer
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from endpoint_agent.config import ScanConfig
from endpoint_agent.errors import EndpointAgentError
from endpoint_agent.run import console, run_endpoints

log = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


class Handler(FileSystemEventHandler):
    def __init__(self, root: str, out_file: str | None, fmt: str, strict: bool | None, debounce: float = 0.8):
        self.root = root
        self.out_file = out_file
        self.fmt = fmt
        self.strict = strict
        self.debounce = debounce
        self.suffix = ScanConfig.from_settings().controller_suffix
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def is_relevant(self, src_path: str) -> bool:
        return Path(src_path).name.endswith(self.suffix)

    def on_any_event(self, event):
        if event.is_directory or not self.is_relevant(event.src_path):
            return

        # 연속 저장은 마지막 이벤트 후 debounce초가 지나면 한 번만 재실행
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce, self.rescan, args=(event.src_path,))
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def rescan(self, src_path: str) -> None:
        console.print(f"[dim]Change detected:[/dim] {src_path}")
        try:
            run_endpoints(self.root, out_file=self.out_file, fmt=self.fmt, strict=self.strict)
        except EndpointAgentError as e:
            # watch 모드에서는 다음 변경까지 대기
            log.error("%s", e)


@app.command()
def watch(
    mapdir: str = typer.Argument(..., help="감시할 디렉터리"),
    out_file: str = typer.Option(None, help="결과를 저장할 파일명"),
    fmt: str = typer.Option("text", "--format", help="출력 형식: text / markdown / json"),
    lenient: bool = typer.Option(False, "--lenient", help="미등록 어노테이션을 기록만 하고 계속 진행"),
):
    root = Path(mapdir).expanduser()
    if not root.is_dir():
        raise typer.BadParameter("watch는 존재하는 로컬 디렉터리에서 사용하세요.")

    strict = False if lenient else None
    try:
        run_endpoints(root, out_file=out_file, fmt=fmt, strict=strict)
    except EndpointAgentError as e:
        log.error("%s", e)

    handler = Handler(str(root), out_file, fmt, strict)
    obs = Observer()
    obs.schedule(handler, str(root), recursive=True)
    obs.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        obs.stop()
        obs.join()
        handler.cancel()


if __name__ == "__main__":
    app()
