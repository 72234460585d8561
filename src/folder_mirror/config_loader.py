"""
YAML config file discovery and loading for folder_mirror.

Config files only carry tuning options (digest, chunk size, dry run,
logging).  Several files may exist; they are merged so that the most
specific one (explicit path, then project, then user) wins per top-level
section.  String values may reference environment variables and a file may
pull in another with ``!include``.

Usage:
    from folder_mirror.config_loader import load_hierarchical_config

    raw = load_hierarchical_config()
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FOLDER_MIRROR_CONFIG"
PROJECT_DIR = ".folder_mirror"
USER_CONFIG = Path(".config") / "folder_mirror" / "config.yml"

# ${NAME} or ${NAME:-fallback}
_ENV_REF = re.compile(r"\$\{(?P<name>[^}:]+?)(?::-(?P<fallback>.*?))?\}")


# ---------------------------------------------------------------------------
# Environment references
# ---------------------------------------------------------------------------


def interpolate_env_vars(value: str) -> str:
    """Expand ``${NAME}`` and ``${NAME:-fallback}`` in *value*.

    An unset or empty variable expands to its fallback, or to ``""`` when
    there is none.  An unterminated ``${`` is kept as written.
    """
    return _ENV_REF.sub(
        lambda m: os.environ.get(m["name"]) or m["fallback"] or "", value
    )


def _interpolate_recursive(node: Any) -> Any:
    if isinstance(node, str):
        return interpolate_env_vars(node)
    if isinstance(node, list):
        return [_interpolate_recursive(item) for item in node]
    if isinstance(node, dict):
        return {key: _interpolate_recursive(val) for key, val in node.items()}
    return node


# ---------------------------------------------------------------------------
# !include
# ---------------------------------------------------------------------------


class ConfigLoader(yaml.SafeLoader):
    """SafeLoader that understands ``!include <path>``.

    Registered on this subclass only, so ``yaml.safe_load`` is unaffected.
    ``chain`` holds the resolved files currently being loaded, outermost
    first, and is used to reject include cycles.
    """

    chain: tuple[Path, ...] = ()

    def include(self, node: yaml.ScalarNode) -> Any:
        here = Path(self.name).resolve()
        target = Path(self.construct_scalar(node))
        if not target.is_absolute():
            target = here.parent / target
        target = target.resolve()

        if target in self.chain:
            cycle = " -> ".join(str(p) for p in (*self.chain, target))
            raise ValueError(f"Circular include detected: {cycle}")
        if not target.is_file():
            raise FileNotFoundError(
                f"Include file not found: {target} (referenced from {here})"
            )
        return _load_yaml_with_includes(target, _chain=self.chain)


ConfigLoader.add_constructor("!include", ConfigLoader.include)


def _load_yaml_with_includes(
    path: Path, *, _chain: tuple[Path, ...] = ()
) -> Any:
    """Parse one YAML document from *path*, following ``!include`` tags."""
    path = path.resolve()
    with open(path, "r", encoding="utf-8") as fh:
        loader = ConfigLoader(fh)
        loader.chain = (*_chain, path)
        try:
            return loader.get_single_data()
        finally:
            loader.dispose()


# ---------------------------------------------------------------------------
# Discovery and merge
# ---------------------------------------------------------------------------


def discover_config_files() -> list[Path]:
    """Return the config files that exist, most specific first.

    Candidates, in order:

    1. The file named by ``FOLDER_MIRROR_CONFIG``.
    2. ``.folder_mirror/config.yml`` in the current directory.
    3. ``.folder_mirror/config.yaml`` in the current directory.
    4. ``~/.config/folder_mirror/config.yml``.
    """
    candidates = []
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        candidates.append(Path(explicit).expanduser().resolve())

    project = Path.cwd() / PROJECT_DIR
    candidates += [project / "config.yml", project / "config.yaml"]
    candidates.append(Path.home() / USER_CONFIG)

    return [path for path in candidates if path.exists()]


def load_hierarchical_config() -> dict[str, Any]:
    """Load every discovered config file and merge them into one dict.

    Files are applied from least to most specific.  A top-level section in
    a more specific file replaces the same section from a less specific one
    as a whole; sections are not merged key by key.  Environment references
    are expanded after merging.

    Returns:
        The merged mapping, or ``{}`` when no config file exists.

    Raises:
        OSError, ValueError, yaml.YAMLError: If a file cannot be read or
            parsed.
    """
    paths = discover_config_files()
    if not paths:
        logger.debug("No config files found, using defaults")
        return {}

    merged: dict[str, Any] = {}
    for path in reversed(paths):
        logger.debug("Loading config: %s", path)
        try:
            data = _load_yaml_with_includes(path)
        except Exception:
            logger.exception("Failed to load config file %s", path)
            raise

        if data is None:
            continue
        if not isinstance(data, dict):
            logger.warning(
                "Ignoring config file %s: top level is a %s, not a mapping",
                path,
                type(data).__name__,
            )
            continue
        merged.update(data)

    return _interpolate_recursive(merged)
