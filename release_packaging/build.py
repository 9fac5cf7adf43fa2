"""Build orchestration for multi-target release archives."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Union

from loguru import logger

from .archiver import create_archive
from .build_config import BuildConfig, TargetDescriptor, UniversalTarget
from .builder import build_binary, ensure_target_installed, strip_binary
from .commands import CommandRunner
from .errors import OutputError, PackagingError, PackagingWarning, Severity
from .metadata import PackageMetadata, read_package_metadata
from .report import report_summary
from .toolchain import validate_toolchain
from .universal import merge_universal


StepResult = Union[Path, PackagingWarning, None]


@dataclass(slots=True)
class Step:
    name: str
    action: Callable[[], StepResult]
    produces_archive: bool = False


@dataclass(slots=True)
class StepOutcome:
    step: str
    severity: Severity
    detail: str = ""


@dataclass(slots=True)
class ReleaseReport:
    """Everything a release run produced, step by step."""

    metadata: Optional[PackageMetadata] = None
    outcomes: list[StepOutcome] = field(default_factory=list)
    archives: list[Path] = field(default_factory=list)
    warnings: list[PackagingWarning] = field(default_factory=list)
    artifacts: list[str] = field(default_factory=list)
    failure: Optional[PackagingError] = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None

    @property
    def exit_code(self) -> int:
        return 0 if self.failure is None else self.failure.exit_code


class ReleasePipeline:
    """Run the release steps in order and stop at the first fatal outcome."""

    def __init__(self, config: BuildConfig, runner: CommandRunner | None = None) -> None:
        self.config = config
        self.runner = runner or CommandRunner(config.project_root)
        self.metadata: PackageMetadata | None = None
        self._artifacts: list[str] = []

    def run(self) -> ReleaseReport:
        report = ReleaseReport()
        for step in self.plan():
            outcome = self._execute(step, report)
            report.outcomes.append(outcome)
            if self._should_abort(outcome):
                logger.error("Aborting release: {}", outcome.detail)
                break
        report.metadata = self.metadata
        report.artifacts = list(self._artifacts)
        return report

    def plan(self) -> list[Step]:
        config = self.config
        steps = [
            Step("read metadata", self._read_metadata),
            Step("prepare output", self._prepare_output),
            Step("validate toolchain", self._validate_toolchain),
        ]
        steps.extend(
            Step(f"install target {target.triple}", self._install_action(target.triple))
            for target in config.targets
        )

        built: set[str] = set()
        universal = config.universal
        for target in config.targets:
            steps.extend(self._target_steps(target))
            built.add(target.key)
            if universal is not None and set(universal.sources) <= built:
                steps.extend(self._universal_steps(universal))
                universal = None

        steps.append(Step("summary", self._summarize))
        return steps

    def _should_abort(self, outcome: StepOutcome) -> bool:
        return outcome.severity is Severity.FATAL

    def _execute(self, step: Step, report: ReleaseReport) -> StepOutcome:
        try:
            result = step.action()
        except PackagingError as exc:
            report.failure = exc
            return StepOutcome(step.name, Severity.FATAL, str(exc))

        if isinstance(result, PackagingWarning):
            report.warnings.append(result)
            return StepOutcome(step.name, Severity.WARNING, result.message)
        if step.produces_archive and isinstance(result, Path):
            report.archives.append(result)
        return StepOutcome(step.name, Severity.OK)

    # Step factories -----------------------------------------------------

    def _install_action(self, triple: str) -> Callable[[], StepResult]:
        def action() -> StepResult:
            ensure_target_installed(self.runner, triple)
            return None

        return action

    def _target_steps(self, target: TargetDescriptor) -> list[Step]:
        def build() -> StepResult:
            return build_binary(self.runner, target, self.config.target_dir, self._app_name)

        def strip() -> StepResult:
            return strip_binary(self.runner, self._binary(target), target.strip_tool)

        def archive() -> StepResult:
            return self._archive(self._binary(target), target.artifact_name(self._app_name, self._version), target)

        return [
            Step(f"build {target.key}", build),
            Step(f"strip {target.key}", strip),
            Step(f"archive {target.key}", archive, produces_archive=True),
        ]

    def _universal_steps(self, universal: UniversalTarget) -> list[Step]:
        def merge() -> StepResult:
            inputs = [self._binary(self.config.target(key)) for key in universal.sources]
            return merge_universal(self.runner, inputs, self._binary(universal))

        def strip() -> StepResult:
            return strip_binary(self.runner, self._binary(universal), universal.strip_tool)

        def archive() -> StepResult:
            output_name = universal.artifact_name(self._app_name, self._version)
            return self._archive(self._binary(universal), output_name, universal)

        return [
            Step(f"merge {universal.key}", merge),
            Step(f"strip {universal.key}", strip),
            Step(f"archive {universal.key}", archive, produces_archive=True),
        ]

    # Step actions -------------------------------------------------------

    def _read_metadata(self) -> StepResult:
        self.metadata = read_package_metadata(self.config.manifest_path, self.runner)
        logger.info("Building {} v{}", self.metadata.name, self.metadata.version)
        return None

    def _prepare_output(self) -> StepResult:
        try:
            self.config.dist_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(self.config.dist_dir, str(exc)) from exc
        logger.info("Output directory: {}", self.config.dist_dir)
        return None

    def _validate_toolchain(self) -> StepResult:
        validate_toolchain(self.runner, self.config.required_tools)
        return None

    def _archive(
        self,
        binary: Path,
        output_name: str,
        target: TargetDescriptor | UniversalTarget,
    ) -> StepResult:
        extras = [self.config.project_root / name for name in self.config.optional_files]
        return create_archive(binary, self.config.dist_dir / output_name, target.archive_format, extras)

    def _summarize(self) -> StepResult:
        self._artifacts = report_summary(self.config.dist_dir)
        return None

    # Helpers ------------------------------------------------------------

    @property
    def _app_name(self) -> str:
        return self.metadata.name if self.metadata else ""

    @property
    def _version(self) -> str:
        return self.metadata.version if self.metadata else ""

    def _binary(self, target: TargetDescriptor | UniversalTarget) -> Path:
        return target.binary_path(self.config.target_dir, self._app_name)


def build_release(config: BuildConfig, runner: CommandRunner | None = None) -> ReleaseReport:
    return ReleasePipeline(config, runner).run()


__all__ = ["ReleasePipeline", "ReleaseReport", "Step", "StepOutcome", "build_release"]
