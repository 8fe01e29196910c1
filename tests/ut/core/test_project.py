"""宿主项目加载测试"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from symlinker.core.exceptions import ConfigError, PackageNotFoundError
from symlinker.core.models import HostPackage
from symlinker.core.project import HostProject


class TestHostProject:
    def test_load_extra_and_default_vendor(self, make_project: Callable[..., Path]) -> None:
        project_file = make_project(extra={"local-vendors": "acme"})
        project = HostProject.load(project_file)
        assert project.extra == {"local-vendors": "acme"}
        assert project.root_dir == project_file.parent
        assert project.vendor_dir == project_file.parent / "vendor"

    def test_custom_vendor_dir(self, real_tmp: Path) -> None:
        f = real_tmp / "composer.json"
        f.write_text(json.dumps({"config": {"vendor-dir": "lib/vendor"}}))
        assert HostProject.load(f).vendor_dir == real_tmp / "lib" / "vendor"

    def test_missing_file(self, real_tmp: Path) -> None:
        with pytest.raises(ConfigError, match="项目文件不存在"):
            HostProject.load(real_tmp / "composer.json")

    def test_invalid_json(self, real_tmp: Path) -> None:
        f = real_tmp / "composer.json"
        f.write_text("{not json")
        with pytest.raises(ConfigError, match="JSON 解析失败"):
            HostProject.load(f)

    def test_non_utf8_file(self, real_tmp: Path) -> None:
        f = real_tmp / "composer.json"
        f.write_bytes(b"{\"extra\": \"\xff\xfe\"}")
        with pytest.raises(ConfigError, match="读取失败"):
            HostProject.load(f)

    def test_lock_entry_without_name(self, real_tmp: Path) -> None:
        f = real_tmp / "composer.json"
        f.write_text("{}")
        (real_tmp / "composer.lock").write_text(
            json.dumps({"packages": [{"version": "1.0.0"}]})
        )
        with pytest.raises(ConfigError, match="缺少 name"):
            HostProject.load(f).locked_packages()

    def test_locked_packages(self, make_project: Callable[..., Path]) -> None:
        project = HostProject.load(make_project(locked=["acme/widget", "Other/Tool"]))
        packages = project.locked_packages()
        assert [p.pretty_name for p in packages] == ["acme/widget", "Other/Tool"]
        assert packages[1].name == "other/tool"
        assert packages[0].version == "1.0.0"
        assert Path(packages[0].dist_path).is_dir()

    def test_missing_lock_file(self, real_tmp: Path) -> None:
        f = real_tmp / "composer.json"
        f.write_text("{}")
        assert HostProject.load(f).locked_packages() == []

    def test_find_package_case_insensitive(self, make_project: Callable[..., Path]) -> None:
        project = HostProject.load(make_project(locked=["Acme/Widget"]))
        assert project.find_package("acme/widget").pretty_name == "Acme/Widget"

    def test_find_unknown_package(self, make_project: Callable[..., Path]) -> None:
        project = HostProject.load(make_project(locked=["acme/widget"]))
        with pytest.raises(PackageNotFoundError, match="不在锁文件中"):
            project.find_package("acme/nope")


class TestHostPackage:
    def test_names(self) -> None:
        p = HostPackage("Acme/Widget")
        assert p.name == "acme/widget"
        assert p.vendor == "acme"
        assert p.short_name == "Widget"

    def test_relative_dist_resolved(self, real_tmp: Path) -> None:
        p = HostPackage.from_lock_entry(
            {"name": "acme/widget", "dist": {"type": "path", "url": "../src/widget"}},
            real_tmp / "project",
        )
        assert p.dist_path == str(real_tmp / "project" / "../src/widget")
        assert p.package_type == "library"

    def test_non_object_lock_entry(self, real_tmp: Path) -> None:
        with pytest.raises(ConfigError, match="缺少 name"):
            HostPackage.from_lock_entry("acme/widget", real_tmp)
