"""统一异常体系

所有业务异常继承 SymlinkerError，替代散落的 ValueError / OSError。
CLI 层可据此输出友好提示并设置退出码。
"""

from __future__ import annotations


class SymlinkerError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(SymlinkerError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class InvalidConfigurationError(ConfigError):
    """本地源配置无效（如 local-dirs 中的目录不存在），整个运行中止"""

    code = "INVALID_CONFIGURATION"


class InvalidLocalPackageOverride(SymlinkerError):
    """local-packages 中的某项未通过结构校验

    不会向外抛出：该项被丢弃并记录告警，对应包回退到目录扫描 / 默认安装器。
    """

    code = "INVALID_LOCAL_PACKAGE"

    def __init__(self, package: str, path: str) -> None:
        super().__init__(
            f'包 "{package}" 定义的本地路径 "{path}" 无效，使用回退方式安装'
        )
        self.package = package
        self.path = path


class SymlinkFailure(SymlinkerError):
    """软链接创建、重命名或删除失败，仅中止当前包的操作"""

    code = "SYMLINK_FAILURE"


class InstallerNotFoundError(SymlinkerError):
    """没有安装器支持该包类型"""

    code = "INSTALLER_NOT_FOUND"


class PackageSourceError(SymlinkerError):
    """默认安装器无法获取包内容（如 dist 目录不存在）"""

    code = "PACKAGE_SOURCE_ERROR"


class PackageNotFoundError(SymlinkerError):
    """锁文件中不存在指定的包"""

    code = "PACKAGE_NOT_FOUND"
