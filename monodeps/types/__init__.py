"""Value types shared across monodeps."""

from .directory import Directory
from .package_name import PackageName

__all__ = ["Directory", "PackageName"]
