"""测试共享 fixture - 本地包目录 + 宿主项目

目录布局（均位于 real_tmp 下）:

  work/<vendor>/<name>/composer.json     本地源
  project/composer.json                  宿主项目文件（extra 段）
  project/composer.lock                  锁定包列表
  dist/<vendor>/<name>/                  默认安装器的复制来源
  project/vendor/<vendor>/<name>         安装结果
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest

import symlinker.core.config as cfgmod
from symlinker.services.container import reset_container


@pytest.fixture
def real_tmp(tmp_path: Path) -> Path:
    """解析掉软链接后的 tmp_path（前缀匹配基于真实路径）"""
    return Path(os.path.realpath(tmp_path))


@pytest.fixture
def make_package_dir() -> Callable[..., Path]:
    def _make(root: Path, pretty_name: str, *, manifest: bool = True) -> Path:
        d = root / pretty_name
        d.mkdir(parents=True, exist_ok=True)
        if manifest:
            (d / "composer.json").write_text(json.dumps({"name": pretty_name}))
        (d / "src").mkdir(exist_ok=True)
        (d / "src" / "main.php").write_text("<?php\n")
        return d
    return _make


@pytest.fixture
def make_project(real_tmp: Path, make_package_dir: Callable[..., Path]) -> Callable[..., Path]:
    """写出 project/composer.json 和 composer.lock，返回项目文件路径

    locked 中的每个包都会在 dist/ 下生成复制来源。
    """
    def _make(extra: dict | None = None, locked: list[str] | None = None) -> Path:
        project_dir = real_tmp / "project"
        project_dir.mkdir(exist_ok=True)
        project_file = project_dir / "composer.json"
        project_file.write_text(json.dumps({"name": "me/app", "extra": extra or {}}))

        entries = []
        for name in locked or []:
            dist = make_package_dir(real_tmp / "dist", name)
            entries.append({
                "name": name,
                "version": "1.0.0",
                "type": "library",
                "dist": {"type": "path", "url": str(dist)},
            })
        (project_dir / "composer.lock").write_text(json.dumps({"packages": entries}))
        return project_file
    return _make


@pytest.fixture(autouse=True)
def _isolated_globals(monkeypatch: pytest.MonkeyPatch):
    """每个测试使用默认配置与全新容器，且不受外部开关环境变量影响"""
    monkeypatch.setattr(cfgmod, "_current", cfgmod.Config())
    monkeypatch.delenv("SYMLINKER_DISABLE", raising=False)
    reset_container()
    yield
    reset_container()
