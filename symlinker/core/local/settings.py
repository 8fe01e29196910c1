"""本地源配置

从宿主项目文件的 extra 段构建，每次运行只构建一次，构建后不可变:

    "extra": {
        "local-dirs": ["/work", "../libs"],
        "local-vendors": ["acme"],
        "local-packages": {"acme/widget": "/opt/src/widget"}
    }

- local-dirs: 字符串或列表，每项必须存在，否则整个运行中止；
  缺省为当前工作目录的上级目录
- local-vendors: 字符串或列表，非空时只有这些 vendor 参与本地解析
- local-packages: vendor/name -> 路径，未通过结构校验的项丢弃并告警
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from symlinker.core.exceptions import InvalidConfigurationError, InvalidLocalPackageOverride
from symlinker.core.local.validator import DEFAULT_MANIFEST_NAME, PackageValidator

logger = logging.getLogger(__name__)


def _as_list(key: str, value: Any) -> list[str]:
    """字符串或字符串列表统一转为列表"""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    raise InvalidConfigurationError(
        f"extra.{key} 必须是字符串或字符串列表，实际为: {value!r}"
    )


def _absolute(path: str, base_dir: Path) -> str:
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base_dir / p
    return os.path.realpath(p)


@dataclass(frozen=True)
class LocalSourceConfig:
    """本地源配置（构建后不可变）"""

    search_directories: tuple[str, ...] = ()
    vendor_allow_list: frozenset[str] = frozenset()
    explicit_package_paths: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}),
    )
    manifest_name: str = DEFAULT_MANIFEST_NAME
    rejected_overrides: tuple[InvalidLocalPackageOverride, ...] = ()

    @property
    def validator(self) -> PackageValidator:
        return PackageValidator(self.manifest_name)

    @classmethod
    def from_extra(
        cls,
        extra: Mapping[str, Any],
        *,
        base_dir: str | Path | None = None,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
    ) -> LocalSourceConfig:
        """由项目 extra 段构建配置

        参数:
            extra: 项目文件中的 extra 字典
            base_dir: 相对路径的基准目录（项目根目录），缺省为当前工作目录
            manifest_name: 结构校验使用的清单文件名

        异常:
            InvalidConfigurationError: local-dirs 中有目录不存在，或配置格式错误
        """
        base = Path(base_dir) if base_dir else Path.cwd()
        validator = PackageValidator(manifest_name)

        raw_dirs = extra.get("local-dirs")
        if raw_dirs is None:
            raw_dirs = os.path.dirname(os.getcwd())
        directories = cls._search_directories(_as_list("local-dirs", raw_dirs), base)

        vendors = frozenset(_as_list("local-vendors", extra.get("local-vendors")))

        raw_packages = extra.get("local-packages") or {}
        if not isinstance(raw_packages, Mapping):
            raise InvalidConfigurationError(
                f"extra.local-packages 必须是 vendor/name -> 路径 的映射，实际为: {raw_packages!r}"
            )
        packages: dict[str, str] = {}
        rejected: list[InvalidLocalPackageOverride] = []
        for name, path in raw_packages.items():
            real = _absolute(str(path), base)
            if not validator.is_valid_package(real):
                override = InvalidLocalPackageOverride(str(name), str(path))
                logger.warning("%s", override)
                rejected.append(override)
                continue
            packages[str(name)] = real

        return cls(
            search_directories=directories,
            vendor_allow_list=vendors,
            explicit_package_paths=MappingProxyType(packages),
            manifest_name=manifest_name,
            rejected_overrides=tuple(rejected),
        )

    @staticmethod
    def _search_directories(dirs: list[str], base: Path) -> tuple[str, ...]:
        result: list[str] = []
        for d in dirs:
            real = _absolute(d, base)
            if not os.path.exists(real):
                raise InvalidConfigurationError(f"本地路径不存在: {d}")
            result.append(real.rstrip("/"))
        return tuple(result)

    def to_dict(self) -> dict[str, Any]:
        return {
            "local-dirs": list(self.search_directories),
            "local-vendors": sorted(self.vendor_allow_list),
            "local-packages": dict(self.explicit_package_paths),
            "manifest": self.manifest_name,
            "rejected": {o.package: o.path for o in self.rejected_overrides},
        }
