#!/usr/bin/env python3
"""
endpoint-agent와 동일한 진입점. 기존 -mapdir 인자 형식 그대로 실행 가능.

  python scripts/run_agent.py -mapdir ./my-project
  python scripts/run_agent.py -mapdir ./my-project --format markdown --out-file endpoints.md
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# 프로젝트 루트에서 실행 시 src 로드 (pip install 없이 실행 가능)
_ROOT = Path(__file__).resolve().parent.parent
_SRC = _ROOT / "src"
if _SRC.exists() and str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="*Controller.java 파일에서 Spring *Mapping 엔드포인트 목록 추출",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  python scripts/run_agent.py -mapdir ./my-project
  python scripts/run_agent.py -mapdir ./my-project --lenient
        """.strip(),
    )
    parser.add_argument("-mapdir", "--mapdir", required=True, help="엔드포인트를 찾을 디렉터리")
    parser.add_argument("--out-file", default=None, help="결과를 저장할 파일명")
    parser.add_argument("--out-dir", type=Path, default=None, help="출력 디렉터리 (기본: DOC_OUTPUT_DIR/endpoints)")
    parser.add_argument("--format", default="text", choices=["text", "markdown", "json"], help="출력 형식")
    parser.add_argument("--lenient", action="store_true", help="미등록 *Mapping 어노테이션을 기록만 하고 계속 진행")
    parser.add_argument("--jobs", type=int, default=None, help="병렬로 스캔할 파일 수")
    parser.add_argument("--follow-symlinks", action="store_true", help="심볼릭 링크 따라가기")

    args = parser.parse_args()

    from endpoint_agent.errors import EndpointAgentError
    from endpoint_agent.run import run_endpoints

    try:
        run_endpoints(
            args.mapdir,
            out_dir=args.out_dir,
            out_file=args.out_file,
            fmt=args.format,
            strict=False if args.lenient else None,
            jobs=args.jobs,
            follow_symlinks=args.follow_symlinks or None,
        )
    except EndpointAgentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
