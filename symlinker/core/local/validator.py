"""本地包结构校验

只做结构检查: 路径存在、是目录、包含清单文件。
不解析清单内容，也不核对清单中的包名与请求的包是否一致，
目录里放着任意合法清单都会通过校验。
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_MANIFEST_NAME = "composer.json"


class PackageValidator:
    """判断一个路径是否像一个包"""

    def __init__(self, manifest_name: str = DEFAULT_MANIFEST_NAME) -> None:
        self.manifest_name = manifest_name

    def is_valid_package(self, path: str | Path | None) -> bool:
        if not path:
            return False
        p = Path(path)
        return p.exists() and p.is_dir() and (p / self.manifest_name).exists()


def is_valid_package(path: str | Path | None, manifest_name: str = DEFAULT_MANIFEST_NAME) -> bool:
    return PackageValidator(manifest_name).is_valid_package(path)
