"""Task to add implied dependencies and selection-specific templates."""

import logging

from tsinit.domain.events import DependenciesExpanded
from tsinit.domain.exceptions import WizardFatalError
from tsinit.domain.models import Context, Dependency
from tsinit.services.project_files import (
    BUNDLER_CONFIG,
    STARTER_SOURCE,
    STYLING_CONFIG,
    copy_template,
)
from tsinit.services.tasks import register

logger = logging.getLogger(__name__)

# Selected dependency -> extra packages (name, dev)
IMPLIED_DEPENDENCIES: dict[str, tuple[tuple[str, bool], ...]] = {
    "react": (
        ("@types/react", True),
        ("@types/react-dom", True),
        ("eslint-plugin-react", True),
        ("@typescript-eslint/eslint-plugin", True),
        ("@typescript-eslint/parser", True),
    ),
    "kysely": (("@types/node", True),),
}

# Selected dependency -> (template, destination relative to the project root)
IMPLIED_TEMPLATES: dict[str, tuple[str, str]] = {
    "typescript": (STARTER_SOURCE, "src/index.ts"),
    "esbuild": (BUNDLER_CONFIG, "esbuild.js"),
    "tailwindcss": (STYLING_CONFIG, "tailwind.config.js"),
}


def implied_dependencies(dependencies: list[Dependency]) -> list[Dependency]:
    """
    Extra dependencies implied by the selected entries.

    Names already in the list, or already implied by an earlier entry, are
    skipped so the list never holds the same package twice.
    """
    seen = {dep.name for dep in dependencies}
    extra: list[Dependency] = []
    for dep in dependencies:
        if not dep.selected:
            continue
        for name, dev in IMPLIED_DEPENDENCIES.get(dep.name, ()):
            if name in seen:
                continue
            seen.add(name)
            extra.append(Dependency(name=name, selected=True, dev=dev))
    return extra


class ExpandDependencies:
    """Task to derive implied dependencies and copy selection templates."""

    name = "expand_dependencies"

    def get_status_message(self, ctx: Context) -> str:
        """Generate status message for this task."""
        return "Resolve extra dependencies"

    def run(self, ctx: Context) -> DependenciesExpanded:
        """Copy templates for selected entries and return the implied dependencies."""
        if ctx.project_path is None:
            raise WizardFatalError("Project has not been created", source=self.name)

        for dep in ctx.dependencies:
            if not dep.selected or dep.name not in IMPLIED_TEMPLATES:
                continue
            template, destination = IMPLIED_TEMPLATES[dep.name]
            copy_template(ctx.project_path, template, destination)

        extra = implied_dependencies(ctx.dependencies)
        logger.info(
            "Selected %d dependencies, %d implied",
            sum(1 for dep in ctx.dependencies if dep.selected),
            len(extra),
        )
        return DependenciesExpanded(dependencies=tuple(extra))


# Auto-register this task
register(ExpandDependencies())
