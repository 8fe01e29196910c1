"""宿主项目加载

读取项目文件（JSON）中的 extra 段与 config.vendor-dir，
以及锁文件中已锁定的包列表。
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from symlinker.core.exceptions import ConfigError, PackageNotFoundError
from symlinker.core.models import HostPackage

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"读取失败: {path} ({e})") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"JSON 解析失败: {path} ({e})") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} 顶层必须是对象")
    return data


@dataclass
class HostProject:
    """宿主项目"""

    root_dir: Path
    vendor_dir: Path
    lock_file: Path
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(
        cls,
        project_file: str | Path,
        *,
        lock_file: str = "composer.lock",
        default_vendor_dir: str = "vendor",
    ) -> HostProject:
        """从项目文件加载，vendor 目录与锁文件的相对路径以项目根目录为基准"""
        path = Path(project_file)
        if not path.exists():
            raise ConfigError(f"项目文件不存在: {path}")
        data = _read_json(path)
        root = path.resolve().parent

        extra = data.get("extra") or {}
        if not isinstance(extra, dict):
            raise ConfigError(f"{path}: extra 必须是对象")

        vendor = (data.get("config") or {}).get("vendor-dir", default_vendor_dir)
        vendor_dir = Path(vendor)
        if not vendor_dir.is_absolute():
            vendor_dir = root / vendor_dir

        lock = Path(lock_file)
        if not lock.is_absolute():
            lock = root / lock

        return cls(root_dir=root, vendor_dir=vendor_dir, lock_file=lock, extra=extra)

    def locked_packages(self) -> list[HostPackage]:
        """读取锁文件中的 packages 与 packages-dev"""
        if not self.lock_file.exists():
            logger.warning("锁文件不存在: %s", self.lock_file)
            return []
        data = _read_json(self.lock_file)
        entries = list(data.get("packages") or []) + list(data.get("packages-dev") or [])
        packages = [HostPackage.from_lock_entry(e, self.root_dir) for e in entries]
        logger.info("已加载 %d 个锁定包", len(packages))
        return packages

    def find_package(self, name: str) -> HostPackage:
        """按名称（不区分大小写）查找锁定包"""
        packages = self.locked_packages()
        for package in packages:
            if package.name == name.lower():
                return package
        raise PackageNotFoundError(
            f"包 '{name}' 不在锁文件中。"
            f"可用: {[p.pretty_name for p in packages]}"
        )
