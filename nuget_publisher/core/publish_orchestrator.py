#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/publish_orchestrator.py - Bump, pack and push a project in sequence
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import os
import time
from dataclasses import dataclass, field
from enum import Enum

from .api_key_store import ApiKeyStore
from .config import ARTIFACT_MAX_POLL_INTERVAL, PACKAGE_ID_PROPERTY, PACKAGE_VERSION_PROPERTY
from .descriptor import BuildDescriptor
from .errors import ArtifactNotFoundError, ConfigurationError, PublisherError, ToolFailureError
from .process_runner import ProcessRunner
from .project import ProjectDescriptor, artifact_path
from .translation_utils import _
from .version_bumper import bump_version_string


class PublishState(Enum):
    IDLE = "idle"
    METADATA_UPDATED = "metadata-updated"
    PACKED = "packed"
    PUSHED = "pushed"
    REPORTED = "reported"


@dataclass
class PublishReport:
    """Everything a publish run produced, in the order it happened"""

    project: ProjectDescriptor
    dry_run: bool = False
    state: PublishState = PublishState.IDLE
    old_version: str = None
    new_version: str = None
    package_id: str = None
    artifact: str = None
    steps: list = field(default_factory=list)
    planned_commands: list = field(default_factory=list)

    @property
    def output_lines(self):
        """Standard output of every step, in arrival order"""
        return [line for step in self.steps for line in step.stdout_lines]

    def summary(self):
        """(field, value) rows describing the published package"""
        return [
            (_("Project"), self.project.name),
            (_("Package"), self.package_id),
            (_("Version"), f"{self.old_version or _('(none)')} -> {self.new_version}"),
            (_("Artifact"), self.artifact),
        ]

    def to_text(self) -> str:
        """Render the report as one newline-joined block"""
        lines = []
        if self.dry_run:
            lines.append(_("Dry run: {0} {1} -> {2}").format(
                self.project.name, self.old_version or _("(none)"), self.new_version
            ))
            for command in self.planned_commands:
                lines.append(_("Would run: {0}").format(" ".join(command)))
            return "\n".join(lines)

        for step in self.steps:
            lines.extend(step.stdout_lines)
            if step.stderr_lines:
                lines.append(_("[{0}] error output:").format(" ".join(step.command[:2])))
                lines.extend(step.stderr_lines)
            if not step.ok:
                lines.append(_("[{0}] exited with code {1}").format(" ".join(step.command[:2]), step.exit_code))
        return "\n".join(lines)


def format_failure(error: PublisherError) -> str:
    """Text shown to the user when a run aborts: partial output, then the error"""
    report = getattr(error, "report", None)
    text = report.to_text() if report else ""
    message = f"{_('ERROR')}: {error}"
    return f"{text}\n\n{message}" if text else message


def wait_for_artifact(path, timeout, poll_interval, sleep=time.sleep, clock=time.monotonic):
    """Block until *path* exists, polling with exponential backoff.

    Raises ArtifactNotFoundError once *timeout* seconds have passed.
    """
    deadline = clock() + timeout
    delay = poll_interval
    while True:
        if os.path.isfile(path):
            return path

        remaining = deadline - clock()
        if remaining <= 0:
            raise ArtifactNotFoundError(path, timeout)

        sleep(min(delay, remaining))
        delay = min(delay * 2, ARTIFACT_MAX_POLL_INTERVAL)


class PublishOrchestrator:
    """Runs Idle -> MetadataUpdated -> Packed -> Pushed -> Reported for the selected project.

    The version written in the first step is not rolled back when a later
    step fails.
    """

    def __init__(self, host, settings, logger=None, runner=None, api_keys=None,
                 sleep=time.sleep, clock=time.monotonic):
        self.host = host
        self.settings = settings
        self.logger = logger
        self.runner = runner or ProcessRunner(logger, timeout=settings.get("process_timeout"))
        self.api_keys = api_keys or ApiKeyStore()
        self.sleep = sleep
        self.clock = clock

    def _log(self, style, message):
        if self.logger:
            self.logger.log(style, message)

    def _step(self, title):
        self._log("cyan", "═" * 60)
        self._log("cyan", title)
        self._log("cyan", "═" * 60)

    def _rollover_threshold(self):
        threshold = self.settings.get("rollover_threshold")
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1:
            raise ConfigurationError(
                _("Setting 'rollover_threshold' must be a positive integer, got {0!r}").format(threshold)
            )
        return threshold

    def _positive_seconds(self, key):
        value = self.settings.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigurationError(
                _("Setting '{0}' must be a positive number of seconds, got {1!r}").format(key, value)
            )
        return value

    def _credentials(self, dry_run):
        source = self.settings.get("source") or ""
        if not source:
            raise ConfigurationError(_("No package source configured. Use --source or set 'source' in the settings."))

        api_key = self.settings.get("api_key") or self.api_keys.get_key(source)
        if not api_key and not dry_run:
            raise ConfigurationError(
                _("No API key for {0}. Use --api-key, NUGET_API_KEY or add it to the API key file.").format(source)
            )
        return source, api_key

    def pack_command(self, project):
        return [
            self.settings.get("tool"), "pack", project.descriptor_path,
            "--configuration", self.settings.get("configuration"),
        ]

    def push_command(self, artifact, source, api_key):
        return [
            self.settings.get("tool"), "nuget", "push", artifact,
            "--source", source, "--api-key", api_key,
        ]

    def run(self, dry_run=False):
        """Publish the host's selected project.

        Returns the PublishReport, or None when no project is selected.
        Raises a PublisherError subclass when any step fails.
        """
        project = self.host.get_selected_project()
        if project is None:
            self._log("yellow", _("No project selected, nothing to publish."))
            return None

        threshold = self._rollover_threshold()
        artifact_timeout = self._positive_seconds("artifact_timeout")
        poll_interval = self._positive_seconds("artifact_poll_interval")
        source, api_key = self._credentials(dry_run)
        configuration = self.settings.get("configuration")

        report = PublishReport(project=project, dry_run=dry_run)

        self._step(_("STEP 1: Update Package Version"))
        self.update_metadata(report, threshold)

        report.artifact = artifact_path(project, report.new_version, configuration)
        if dry_run:
            report.planned_commands = [
                self.pack_command(project),
                self.push_command(report.artifact, source, "***"),
            ]
            self._log("yellow", _("DRY-RUN MODE: descriptor not modified, no tool executed"))
            for command in report.planned_commands:
                self._log("cyan", _("Would run: {0}").format(" ".join(command)))
            return self._report(report)

        self._step(_("STEP 2: Pack {0}").format(project.name))
        self._run_step(report, self.pack_command(project))
        report.state = PublishState.PACKED

        self._step(_("STEP 3: Push {0}").format(os.path.basename(report.artifact)))
        try:
            wait_for_artifact(
                report.artifact,
                artifact_timeout,
                poll_interval,
                sleep=self.sleep,
                clock=self.clock,
            )
        except ArtifactNotFoundError as e:
            e.report = report
            raise
        self._run_step(report, self.push_command(report.artifact, source, api_key), secrets=(api_key,))
        report.state = PublishState.PUSHED

        self._log("green", _("✓ {0} {1} published to {2}").format(report.package_id, report.new_version, source))
        return self._report(report)

    def update_metadata(self, report, threshold):
        """Bump PackageVersion (and default PackageId) in the project's descriptor"""
        project = report.project
        descriptor = BuildDescriptor.open(project.descriptor_path)
        properties = descriptor.properties

        # An empty <PackageVersion/> counts as no version at all
        report.old_version = properties.get(PACKAGE_VERSION_PROPERTY) or None
        report.new_version = bump_version_string(report.old_version, threshold)
        report.package_id = properties.get(PACKAGE_ID_PROPERTY) or project.name

        if report.old_version is None:
            self._log("yellow", _("No {0} found, starting at {1}").format(PACKAGE_VERSION_PROPERTY, report.new_version))
        else:
            self._log("cyan", _("Version {0} -> {1}").format(report.old_version, report.new_version))

        if report.dry_run:
            return

        descriptor.set_property(PACKAGE_VERSION_PROPERTY, report.new_version)
        if not properties.get(PACKAGE_ID_PROPERTY):
            descriptor.set_property(PACKAGE_ID_PROPERTY, project.name)
        descriptor.save()

        report.state = PublishState.METADATA_UPDATED
        self._log("green", _("✓ {0} updated").format(os.path.basename(project.descriptor_path)))

    def _run_step(self, report, command, secrets=()):
        try:
            result = self.runner.run(command, secrets=secrets)
        except ToolFailureError as e:
            report.steps.append(e.result)
            e.report = report
            raise
        except PublisherError as e:
            e.report = report
            raise

        report.steps.append(result)
        if not result.ok:
            self._log("red", _("✗ {0} exited with code {1}").format(" ".join(result.command[:2]), result.exit_code))
            raise ToolFailureError(result, report)
        return result

    def _report(self, report):
        self.host.show_report(report.to_text())
        report.state = PublishState.REPORTED
        return report
