"""Import every module of a package so its `@register` decorators run."""

import importlib
import logging
import pkgutil

logger = logging.getLogger(__name__)

SKIPPED_MODULES = {"config", "context"}


def discover_tools_in_package(package_name: str, recursive: bool = True) -> list[str]:
    """
    Import the modules of `package_name`, returning the names imported.

    Args:
        package_name: Dotted name of the package, e.g. "golang_mcp.tools"
        recursive: Whether to descend into subpackages

    Example:
        discover_tools_in_package("golang_mcp.tools")
    """
    package = importlib.import_module(package_name)
    if not getattr(package, "__path__", None):
        logger.warning(f"{package_name} is not a package")
        return []

    walker = pkgutil.walk_packages if recursive else pkgutil.iter_modules
    imported = []
    for module_info in walker(package.__path__, prefix=f"{package_name}."):
        if module_info.name.rsplit(".", 1)[-1] in SKIPPED_MODULES:
            continue
        try:
            importlib.import_module(module_info.name)
        except Exception as e:
            logger.warning(f"Failed to import {module_info.name} during discovery: {e}")
            continue
        imported.append(module_info.name)

    logger.info(f"Auto-discovery completed. Imported {len(imported)} modules from {package_name}")
    return imported
