"""Shared test fixtures for endpoint-agent tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


ORDER_CONTROLLER = """\
package com.example.shop;

@RestController
@RequestMapping("/orders")
public class OrderController {

    @GetMapping("/{id}")
    public Order get(@PathVariable Long id) { return service.get(id); }

    @PostMapping(value = "/", consumes = "application/json")
    public Order create(@RequestBody Order order) { return service.create(order); }

    @DeleteMapping
    public void clear() { service.clear(); }
}
"""

USER_CONTROLLER = """\
@RestController
public class UserController {
    @GetMapping("/users")
    public List<User> list() { return users; }
}
"""


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a text file under tmp_path, creating parent directories."""

    def _write(rel: str, content: str | bytes = "") -> Path:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            p.write_bytes(content)
        else:
            p.write_text(content, encoding="utf-8")
        return p

    return _write


@pytest.fixture
def controller_tree(tmp_path: Path, write_file) -> Path:
    """A small Spring project layout with controllers, noise files and a hidden dir."""
    write_file("src/main/java/com/example/shop/OrderController.java", ORDER_CONTROLLER)
    write_file("src/main/java/com/example/user/UserController.java", USER_CONTROLLER)
    write_file("src/main/java/com/example/shop/OrderService.java", '@GetMapping("/not-scanned")\n')
    write_file("src/main/resources/application.yml", "server:\n  port: 8080\n")
    write_file(".git/objects/StaleController.java", '@GetMapping("/hidden")\n')
    return tmp_path
