"""集中配置管理

工具级配置（项目文件名、vendor 目录、清单文件名、开关环境变量等），
支持从 YAML 文件加载 + 编程式覆盖。

注意: 本地源配置（local-dirs / local-vendors / local-packages）来自项目文件
的 extra 段，见 symlinker.core.local.settings。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field

from symlinker.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "configs/symlinker.yml"


@dataclass
class Config:
    """symlinker 全局配置"""

    # 宿主项目
    project_file: str = "composer.json"
    lock_file: str = "composer.lock"
    vendor_dir: str = "vendor"

    # 包结构校验使用的清单文件名
    manifest_name: str = "composer.json"

    # 默认安装器处理的包类型
    package_type: str = "library"

    # 非空时整体禁用本地软链接
    disable_env: str = "SYMLINKER_DISABLE"

    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
