"""Task to install a single dependency with npm."""

import logging

from tsinit.adapters.npm_client import install_args
from tsinit.domain.events import DependencyInstalled
from tsinit.domain.exceptions import WizardFatalError
from tsinit.domain.models import Context, Dependency
from tsinit.services.settings import get_npm_executable
from tsinit.services.tasks import register

logger = logging.getLogger(__name__)


class InstallDependency:
    """Task to run ``npm install`` for the dependency at ctx.index."""

    name = "install_dependency"

    def _dependency(self, ctx: Context) -> Dependency:
        if ctx.index is None or not 0 <= ctx.index < len(ctx.dependencies):
            raise WizardFatalError(f"No dependency at index {ctx.index}", source=self.name)
        return ctx.dependencies[ctx.index]

    def get_status_message(self, ctx: Context) -> str:
        """Generate status message for this task."""
        return f"Install {self._dependency(ctx).name}"

    def run(self, ctx: Context) -> DependencyInstalled:
        """Install the dependency; any non-zero exit is fatal."""
        if ctx.project_path is None:
            raise WizardFatalError("Project has not been created", source=self.name)

        dependency = self._dependency(ctx)
        result = ctx.runner.run(install_args(get_npm_executable(), dependency), ctx.project_path)
        if not result.ok:
            logger.error("Install of %s failed: %s", dependency.name, result.stderr.strip())
            raise WizardFatalError(result.error_text(), source=self.name)

        return DependencyInstalled(index=ctx.index)


# Auto-register this task
register(InstallDependency())
