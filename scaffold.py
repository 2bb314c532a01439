"""Create a new plugin skeleton and register it in the marketplace."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from config import Config
from utils import get_logger
from validation.manifest import MANIFEST_DIR, MANIFEST_FILE
from validation.skills import KEBAB_CASE_RE

logger = get_logger(__name__)

PLACEHOLDER_DESCRIPTION = "Description of your plugin"

README_TEMPLATE = """\
# {name}

Description of your plugin.

## Installation

```bash
/plugin install {name}@{marketplace}
```

## Features

- Feature 1
- Feature 2

## Commands

- `/command-name`: Description

## Skills

- **skill-name**: Description
"""


@dataclass
class ScaffoldResult:
    plugin_dir: Path
    created: list[Path] = field(default_factory=list)
    registered: bool = False
    # Why registration was skipped, when it was
    note: str | None = None


def build_manifest(name: str) -> dict:
    manifest = {
        "name": name,
        "version": "1.0.0",
        "description": PLACEHOLDER_DESCRIPTION,
        "author": {"name": "Your Name"},
        "license": Config.PLUGIN_LICENSE,
        "keywords": ["keyword1", "keyword2"],
        "skills": "./skills/",
        "commands": "./commands/",
        "agents": "./agents/",
    }
    if Config.PLUGIN_REPOSITORY:
        manifest["repository"] = Config.PLUGIN_REPOSITORY
    return manifest


def register_in_marketplace(marketplace_file: Path, name: str, source: str) -> str | None:
    """Append a plugin entry to marketplace.json.

    Returns:
        None on success, otherwise the reason nothing was written
    """
    if not marketplace_file.is_file():
        return f"marketplace.json not found at {marketplace_file}"

    try:
        data = json.loads(marketplace_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        return f"Could not auto-register plugin: cannot read {marketplace_file}: {e}"
    if not isinstance(data, dict):
        return f"Could not auto-register plugin: {marketplace_file} is not a JSON object"
    plugins = data.setdefault("plugins", [])
    if not isinstance(plugins, list):
        return f"Could not auto-register plugin: 'plugins' in {marketplace_file} is not a list"
    if any(isinstance(entry, dict) and entry.get("name") == name for entry in plugins):
        return f"Plugin '{name}' already exists in marketplace.json"

    plugins.append(
        {
            "name": name,
            "source": source,
            "description": PLACEHOLDER_DESCRIPTION,
            "category": "general",
            "tags": ["new-plugin"],
        }
    )
    marketplace_file.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return None


def init_plugin(root: Path, name: str) -> ScaffoldResult:
    """Create plugins/<name>/ with a manifest, README and empty component dirs.

    Raises:
        ValueError: If name is not kebab-case
        FileExistsError: If the plugin already has a manifest
    """
    if not KEBAB_CASE_RE.match(name):
        raise ValueError(f"Plugin name must be kebab-case (got '{name}')")

    plugins_dir = root / Config.PLUGINS_DIR
    plugin_dir = plugins_dir / name
    manifest_path = plugin_dir / MANIFEST_DIR / MANIFEST_FILE
    if manifest_path.exists():
        raise FileExistsError(f"Plugin '{name}' already exists at {plugin_dir}")

    result = ScaffoldResult(plugin_dir=plugin_dir)
    for subdir in (MANIFEST_DIR, "skills", "commands", "agents"):
        path = plugin_dir / subdir
        path.mkdir(parents=True, exist_ok=True)
        result.created.append(path)

    manifest_path.write_text(json.dumps(build_manifest(name), indent=2) + "\n", encoding="utf-8")
    result.created.append(manifest_path)

    marketplace_file = root / Config.MARKETPLACE_FILE
    readme = plugin_dir / "README.md"
    readme.write_text(
        README_TEMPLATE.format(name=name, marketplace=root.resolve().name), encoding="utf-8"
    )
    result.created.append(readme)

    result.note = register_in_marketplace(
        marketplace_file, name, f"./{Path(Config.PLUGINS_DIR).as_posix()}/{name}"
    )
    result.registered = result.note is None
    logger.info(f"Scaffolded plugin {name} at {plugin_dir} (registered={result.registered})")
    return result
