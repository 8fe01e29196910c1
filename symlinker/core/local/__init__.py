"""本地源解析与软链接管理

- models.py: PackageIdentity / ResolutionResult / LinkState
- settings.py: LocalSourceConfig（extra 段）
- validator.py: 包结构校验
- resolver.py: 本地源路径解析
- symlink.py: 软链接生命周期
"""

from symlinker.core.local.models import LinkState, PackageIdentity, ResolutionResult
from symlinker.core.local.resolver import PathResolver
from symlinker.core.local.settings import LocalSourceConfig
from symlinker.core.local.symlink import SymlinkManager
from symlinker.core.local.validator import PackageValidator, is_valid_package

__all__ = [
    "LinkState",
    "LocalSourceConfig",
    "PackageIdentity",
    "PackageValidator",
    "PathResolver",
    "ResolutionResult",
    "SymlinkManager",
    "is_valid_package",
]
