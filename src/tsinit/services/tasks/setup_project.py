"""Task to create the project directory and its initial files."""

import logging
import os
from pathlib import Path

from tsinit.domain.events import ProjectCreated
from tsinit.domain.exceptions import PathConflictError, WizardFatalError
from tsinit.domain.models import Context
from tsinit.services.project_files import (
    BUNDLER_CONFIG,
    LINT_CONFIG,
    copy_template,
    package_json,
    tsconfig_json,
    write_json,
)
from tsinit.services.tasks import register

logger = logging.getLogger(__name__)


def resolve_project_path(project_name: str) -> Path:
    """
    Absolute path for a project named project_name under the working directory.

    A leading root is dropped so absolute names still land under the working
    directory, and the joined path is normalized.
    """
    name = Path(project_name)
    if name.anchor:
        name = name.relative_to(name.anchor)
    return Path(os.path.normpath(Path.cwd() / name))


class SetupProject:
    """Task to create the project tree, config files and base templates."""

    name = "setup_project"

    def get_status_message(self, ctx: Context) -> str:
        """Generate status message for this task."""
        return f"Create project {ctx.project_name}"

    def run(self, ctx: Context) -> ProjectCreated:
        """
        Create the project at ./<project_name>.

        Partially created files are left in place if a later step fails.

        Raises:
            WizardFatalError: If the name is empty
            PathConflictError: If something already exists at the target path
            OSError: If any filesystem step fails
        """
        project_name = ctx.project_name
        if not project_name.strip():
            raise WizardFatalError("Project name is required", source=self.name)

        project_path = resolve_project_path(project_name)
        if project_path.exists() or project_path.is_symlink():
            raise PathConflictError(
                f"Unable to create project at {project_path} directory already exists.",
                source=self.name,
            )

        (project_path / "src").mkdir(parents=True)
        logger.info("Created project directory %s", project_path)

        write_json(project_path, "package.json", package_json(project_name))
        write_json(project_path, "tsconfig.json", tsconfig_json())
        copy_template(project_path, LINT_CONFIG, "eslintrc.cjs")
        copy_template(project_path, BUNDLER_CONFIG, "esbuild.js")

        return ProjectCreated(project_path=project_path)


# Auto-register this task
register(SetupProject())
