"""Which tool each kind of work needs, and how to install it.

Requirements are checked against a ToolRegistry; the doctor command and the
dispatcher's missing-tool errors both read their install hints from here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mediaconv.formats.registry import Category
from mediaconv.tools.models import TOOL_NAMES, ToolRegistry

FFMPEG_HINT = "Install FFmpeg: https://ffmpeg.org/download.html"

INSTALL_HINTS: dict[str, str] = {
    "ffmpeg": FFMPEG_HINT,
    "ffprobe": FFMPEG_HINT,
    "magick": "Install ImageMagick 7: https://imagemagick.org/script/download.php",
    "pandoc": "Install pandoc: https://pandoc.org/installing.html",
}

# Tool that performs conversions for each category
CATEGORY_TOOLS: dict[Category, str] = {
    Category.VIDEO: "ffmpeg",
    Category.AUDIO: "ffmpeg",
    Category.IMAGE: "magick",
    Category.DOCUMENT: "pandoc",
}


class RequirementLevel(Enum):
    REQUIRED = "required"  # the feature does not work at all
    RECOMMENDED = "recommended"  # works, but an upgrade is advised


@dataclass(frozen=True)
class ToolRequirement:
    """A feature's dependency on a tool, optionally at a minimum version."""

    tool_name: str
    feature_name: str
    level: RequirementLevel = RequirementLevel.REQUIRED
    min_version: tuple[int, ...] | None = None

    @property
    def install_hint(self) -> str:
        return get_install_hint(self.tool_name)

    def check(self, registry: ToolRegistry) -> RequirementCheckResult:
        """Evaluate this requirement against the detected tools."""
        tool = registry.get_tool(self.tool_name)
        if tool is None or not tool.is_available():
            return RequirementCheckResult(
                self,
                satisfied=False,
                message=f"{self.feature_name}: {self.tool_name} not found. "
                f"{self.install_hint}",
            )
        if self.min_version is not None and not tool.meets_version(self.min_version):
            wanted = ".".join(map(str, self.min_version))
            return RequirementCheckResult(
                self,
                satisfied=False,
                current_version=tool.version,
                message=f"{self.feature_name}: {self.tool_name} version "
                f"{tool.version or 'unknown'} < recommended {wanted}. "
                f"{self.install_hint}",
            )
        return RequirementCheckResult(
            self, satisfied=True, current_version=tool.version
        )


@dataclass(frozen=True)
class RequirementCheckResult:
    requirement: ToolRequirement
    satisfied: bool
    current_version: str | None = None
    message: str = ""


@dataclass(frozen=True)
class RequirementsReport:
    """Outcome of checking a set of requirements."""

    results: tuple[RequirementCheckResult, ...] = ()

    @property
    def all_satisfied(self) -> bool:
        return all(r.satisfied for r in self.results)

    @property
    def required_satisfied(self) -> bool:
        return not self.get_unsatisfied(RequirementLevel.REQUIRED)

    def get_unsatisfied(
        self, level: RequirementLevel | None = None
    ) -> list[RequirementCheckResult]:
        """Unsatisfied results, restricted to one level when given."""
        return [
            r
            for r in self.results
            if not r.satisfied and (level is None or r.requirement.level == level)
        ]

    def get_messages(self, level: RequirementLevel | None = None) -> list[str]:
        return [r.message for r in self.get_unsatisfied(level)]


# Every tool is required by at least one feature
FEATURE_REQUIREMENTS = (
    ToolRequirement("ffmpeg", "Video and Audio Conversion"),
    ToolRequirement("ffprobe", "Media Information"),
    ToolRequirement("magick", "Image Processing"),
    ToolRequirement("pandoc", "Document Conversion"),
)

# ffmpeg 4 added the palettegen/paletteuse options the GIF filter relies on;
# the "magick" entry point ships with ImageMagick 7.
VERSION_RECOMMENDATIONS = (
    ToolRequirement("ffmpeg", "Modern FFmpeg", RequirementLevel.RECOMMENDED, (4, 0)),
    ToolRequirement("magick", "ImageMagick 7", RequirementLevel.RECOMMENDED, (7, 0)),
)

ALL_REQUIREMENTS = FEATURE_REQUIREMENTS + VERSION_RECOMMENDATIONS


def check_requirements(
    registry: ToolRegistry,
    requirements: tuple[ToolRequirement, ...] = ALL_REQUIREMENTS,
) -> RequirementsReport:
    return RequirementsReport(tuple(req.check(registry) for req in requirements))


def get_upgrade_suggestions(registry: ToolRegistry) -> list[str]:
    """Messages for installed tools below, or of unknown, recommended version."""
    report = check_requirements(registry, VERSION_RECOMMENDATIONS)
    return [
        r.message
        for r in report.get_unsatisfied()
        if registry.is_available(r.requirement.tool_name)
    ]


def get_install_hint(tool_name: str) -> str:
    """Return the install hint for a tool ("" for unknown tools)."""
    return INSTALL_HINTS.get(tool_name, "")


def get_missing_tool_hints(registry: ToolRegistry) -> dict[str, str]:
    """Install hints keyed by the name of each tool the registry lacks."""
    return {
        name: get_install_hint(name)
        for name in TOOL_NAMES
        if not registry.is_available(name)
    }


def tool_for_category(category: Category) -> str:
    return CATEGORY_TOOLS[category]
