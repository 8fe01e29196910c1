"""安装管理器与默认安装器测试"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from symlinker.core.exceptions import InstallerNotFoundError, PackageSourceError
from symlinker.core.installer import DefaultInstaller
from symlinker.core.manager import InstallationManager, InstallerRegistry
from symlinker.core.models import MODE_DEFAULT, HostPackage


def _fake_installer(package_type: str) -> MagicMock:
    installer = MagicMock()
    installer.supports.side_effect = lambda t: t == package_type
    return installer


class TestInstallerRegistry:
    def test_first_supporting_wins(self) -> None:
        a = _fake_installer("library")
        b = _fake_installer("library")
        assert InstallerRegistry([a, b]).get_installer("library") is a

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(InstallerNotFoundError, match="metapackage"):
            InstallerRegistry([_fake_installer("library")]).get_installer("metapackage")

    def test_snapshot_not_affected_by_later_registration(self) -> None:
        manager = InstallationManager()
        manager.add_installer(_fake_installer("library"))
        snapshot = manager.snapshot()
        manager.add_installer(_fake_installer("library"))
        assert len(snapshot) == 1


class TestInstallationManager:
    def test_newest_installer_first(self) -> None:
        manager = InstallationManager()
        old = _fake_installer("library")
        new = _fake_installer("library")
        manager.add_installer(old)
        manager.add_installer(new)
        assert manager.get_installer("library") is new

    def test_type_change_removes_then_installs(self) -> None:
        lib = _fake_installer("library")
        plugin = _fake_installer("plugin")
        manager = InstallationManager()
        manager.add_installer(lib)
        manager.add_installer(plugin)
        initial = HostPackage("acme/widget")
        target = initial.replace(package_type="plugin")

        manager.update(initial, target)

        lib.remove_code.assert_called_once_with(initial)
        plugin.install_code.assert_called_once_with(target)
        lib.update_code.assert_not_called()

    def test_install_all_isolates_failures(self) -> None:
        installer = _fake_installer("library")

        def _install(package: HostPackage):
            if package.pretty_name == "acme/broken":
                raise PackageSourceError("dist 目录不存在")
            return MagicMock(message="ok")

        installer.install_code.side_effect = _install
        manager = InstallationManager()
        manager.add_installer(installer)

        results = manager.install_all([
            HostPackage("acme/broken"), HostPackage("acme/widget"),
        ])

        assert isinstance(results["acme/broken"], str)
        assert results["acme/broken"].startswith("[FAILED]")
        assert not isinstance(results["acme/widget"], str)


class TestDefaultInstaller:
    def test_install_copies_dist(
        self, real_tmp: Path, make_package_dir: Callable[..., Path],
    ) -> None:
        dist = make_package_dir(real_tmp / "dist", "acme/widget")
        installer = DefaultInstaller(real_tmp / "vendor")
        package = HostPackage("acme/widget", dist_path=str(dist))

        report = installer.install_code(package)

        dest = real_tmp / "vendor" / "acme" / "widget"
        assert dest.is_dir() and not dest.is_symlink()
        assert (dest / "composer.json").exists()
        assert report.mode == MODE_DEFAULT
        assert installer.is_installed(package)

    def test_missing_dist_raises(self, real_tmp: Path) -> None:
        installer = DefaultInstaller(real_tmp / "vendor")
        with pytest.raises(PackageSourceError, match="dist 目录不存在"):
            installer.install_code(HostPackage("acme/widget"))

    def test_install_over_symlink_keeps_link_target(
        self, real_tmp: Path, make_package_dir: Callable[..., Path],
    ) -> None:
        local = make_package_dir(real_tmp / "work", "acme/widget")
        dist = make_package_dir(real_tmp / "dist", "acme/widget")
        dest = real_tmp / "vendor" / "acme" / "widget"
        dest.parent.mkdir(parents=True)
        os.symlink(local, dest)

        DefaultInstaller(real_tmp / "vendor").install_code(
            HostPackage("acme/widget", dist_path=str(dist)),
        )

        assert not dest.is_symlink()
        assert (local / "composer.json").exists()

    def test_remove(self, real_tmp: Path, make_package_dir: Callable[..., Path]) -> None:
        dist = make_package_dir(real_tmp / "dist", "acme/widget")
        installer = DefaultInstaller(real_tmp / "vendor")
        package = HostPackage("acme/widget", dist_path=str(dist))
        installer.install_code(package)

        installer.remove_code(package)
        assert not installer.is_installed(package)
        assert dist.exists()

    def test_supports_only_configured_type(self, real_tmp: Path) -> None:
        installer = DefaultInstaller(real_tmp, package_type="library")
        assert installer.supports("library")
        assert not installer.supports("plugin")
