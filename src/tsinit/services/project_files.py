"""Config file generation and template copying for new projects."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path

from tsinit.services.settings import TEMPLATE_DIR_ENV, get_template_dir

logger = logging.getLogger(__name__)

LINT_CONFIG = "eslintrc.cjs"
BUNDLER_CONFIG = "esbuild.js"
STARTER_SOURCE = "index.ts"
STYLING_CONFIG = "tailwind.config.js"

TEMPLATES = (LINT_CONFIG, BUNDLER_CONFIG, STARTER_SOURCE, STYLING_CONFIG)

FILE_MODE = 0o644


def package_json(project_name: str) -> dict:
    """Default package manifest for a new project."""
    return {
        "name": project_name,
        "version": "1.0.0",
        "type": "module",
    }


def tsconfig_json() -> dict:
    """Default TypeScript compiler configuration."""
    return {
        "compilerOptions": {
            "module": "NodeNext",
            "moduleResolution": "NodeNext",
            "target": "ESNext",
            "forceConsistentCasingInFileNames": True,
            "esModuleInterop": True,
            "strict": True,
        },
        "include": ["src/**/*.*"],
        "exclude": ["**/node_modules", "**/.*/"],
    }


def write_json(directory: Path, file_name: str, data: dict) -> Path:
    """Write data as 4-space indented JSON."""
    target = directory / file_name
    target.write_text(json.dumps(data, indent=4), encoding="utf-8")
    target.chmod(FILE_MODE)
    return target


def load_template(name: str) -> bytes:
    """
    Return the bytes of a template file.

    Templates come from TSINIT_TEMPLATE_DIR when it is set, otherwise from the
    files bundled with the package.

    Raises:
        FileNotFoundError: If the template does not exist
    """
    override = get_template_dir()
    if override is not None:
        candidate = override / name
        if candidate.is_file():
            return candidate.read_bytes()
        raise FileNotFoundError(f"Template {name} not found in {TEMPLATE_DIR_ENV}: {override}")

    template = resources.files("tsinit.templates") / name
    if not template.is_file():
        raise FileNotFoundError(f"Bundled template {name} is missing")
    return template.read_bytes()


def copy_template(project_path: Path, template_name: str, destination: str) -> Path:
    """Copy a template verbatim to destination, relative to the project root."""
    target = project_path / destination
    target.write_bytes(load_template(template_name))
    target.chmod(FILE_MODE)
    logger.debug("Copied template %s to %s", template_name, target)
    return target
