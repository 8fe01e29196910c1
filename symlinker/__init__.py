"""local-symlinker - 本地包软链接安装插件"""

__version__ = "0.1.0"
