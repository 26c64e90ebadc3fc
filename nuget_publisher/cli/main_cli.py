#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/main_cli.py - Entry point for CLI interface
#

import argparse
import os
import sys

from rich.console import Console

from ..core.api_key_store import ApiKeyStore
from ..core.config import APP_DESC, APP_NAME, APP_VERSION, DESCRIPTOR_EXTENSION
from ..core.errors import PublisherError
from ..core.host import PathHost
from ..core.project import ProjectDescriptor
from ..core.publish_orchestrator import PublishOrchestrator, format_failure
from ..core.settings import Settings
from ..core.translation_utils import _
from .logger import RichLogger


class CliHost(PathHost):
    """Terminal host: the project comes from the command line or the working directory"""

    def __init__(self, path, logger):
        super().__init__(path, self._print_report)
        self.logger = logger

    def get_selected_project(self):
        path = self.path
        if not path:
            # Without an explicit project, use the working directory when it holds one
            cwd = os.getcwd()
            if not any(f.endswith(DESCRIPTOR_EXTENSION) for f in os.listdir(cwd)):
                return None
            path = cwd

        project = ProjectDescriptor.from_path(path)
        self.logger.setup_log_file(project.name)
        return project

    def _print_report(self, text):
        self.logger.display_report(_("Publish Result"), text)

    def show_failure(self, text):
        self.logger.display_report(_("Publish Failed"), text, style="red")


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parses command line arguments"""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=APP_DESC,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_(
            "examples:\n"
            "  {0} MyLib/MyLib.csproj -s https://nuget.pkg.github.com/org/index.json\n"
            "  {0} --dry-run\n"
            "  NUGET_API_KEY=... {0} MyLib"
        ).format(APP_NAME),
    )
    parser.add_argument("project", nargs="?",
                        help=_("Project file or directory containing one (default: current directory)"))
    parser.add_argument("-s", "--source",
                        help=_("Package source to push to"))
    parser.add_argument("-k", "--api-key",
                        help=_("API key for the package source"))
    parser.add_argument("-c", "--configuration",
                        help=_("Build configuration passed to pack"))
    parser.add_argument("--tool",
                        help=_("Executable providing 'pack' and 'nuget push'"))
    parser.add_argument("--threshold", type=int, dest="rollover_threshold",
                        help=_("Value at which minor and patch roll over"))
    parser.add_argument("--timeout", type=float, dest="process_timeout",
                        help=_("Stop a tool that runs longer than this many seconds"))
    parser.add_argument("--dry-run", action="store_true",
                        help=_("Show the new version and commands without changing anything"))
    parser.add_argument("--gui", action="store_true",
                        help=_("Show the result in a window instead of the terminal"))
    parser.add_argument("--config",
                        help=_("Alternative settings file"))
    maintenance = parser.add_mutually_exclusive_group()
    maintenance.add_argument("--save-api-key", action="store_true",
                             help=_("Store the --api-key value for the package source and exit"))
    maintenance.add_argument("--forget-api-key", action="store_true",
                             help=_("Remove the stored API key for the package source and exit"))
    maintenance.add_argument("--save-settings", action="store_true",
                             help=_("Store -s, -c, --tool, --threshold and --timeout as defaults and exit"))
    maintenance.add_argument("--reset-settings", action="store_true",
                             help=_("Restore the default settings and exit"))
    parser.add_argument("-n", "--nocolor", action="store_true",
                        help=_("Disable colored output"))
    parser.add_argument("-V", "--version", action="version",
                        version=f"{APP_NAME} {APP_VERSION}")
    return parser.parse_args(argv)


def setting_overrides(args) -> dict:
    """Stored settings named on the command line; None means not given"""
    return {
        "source": args.source,
        "configuration": args.configuration,
        "tool": args.tool,
        "rollover_threshold": args.rollover_threshold,
        "process_timeout": args.process_timeout,
    }


def build_settings(args) -> Settings:
    """Load stored settings and apply this run's command line overrides"""
    settings = Settings(args.config)
    settings.override(api_key=args.api_key, **setting_overrides(args))
    return settings


def run_maintenance(args, settings, logger) -> int:
    """Handle the options that manage stored settings and API keys"""
    source = settings.get("source")

    if args.save_api_key:
        if not args.api_key:
            logger.die("red", _("--save-api-key needs the key given with --api-key"))
        if not ApiKeyStore().upsert(source, args.api_key):
            logger.die("red", _("Could not write the API key file"))
        logger.log("green", _("✓ API key saved for {0}").format(source))

    elif args.forget_api_key:
        if not ApiKeyStore().delete(source):
            logger.die("red", _("Could not write the API key file"))
        logger.log("green", _("✓ API key removed for {0}").format(source))

    elif args.save_settings:
        # Fresh copy so a --api-key given on this run never lands in the settings file
        stored = Settings(args.config)
        for key, value in setting_overrides(args).items():
            if value is not None and not stored.set(key, value):
                logger.die("red", _("Could not write {0}").format(stored.config_file))
        logger.log("green", _("✓ Settings saved to {0}").format(stored.config_file))

    elif args.reset_settings:
        if not settings.reset():
            logger.die("red", _("Could not write {0}").format(settings.config_file))
        logger.log("green", _("✓ Settings reset to defaults"))

    return 0


def main(argv=None) -> int:
    """Main entry point of the CLI application"""
    args = parse_arguments(argv)
    settings = build_settings(args)

    if args.gui:
        try:
            from ..gui.main_gui import run_gui
        except (ImportError, ValueError) as e:
            # PyGObject or the Gtk 4 / Adw typelibs are missing
            RichLogger(use_colors=not args.nocolor).die(
                "red", _("The graphical interface is not available: {0}").format(e)
            )
        return run_gui(args.project, settings, dry_run=args.dry_run)

    console = Console()
    logger = RichLogger(use_colors=not args.nocolor)
    if settings.load_error:
        logger.log("yellow", _("Could not read settings, using defaults: {0}").format(settings.load_error))

    host = CliHost(args.project, logger)

    try:
        if args.save_api_key or args.forget_api_key or args.save_settings or args.reset_settings:
            return run_maintenance(args, settings, logger)

        logger.draw_app_header()
        orchestrator = PublishOrchestrator(host, settings, logger=logger)
        report = orchestrator.run(dry_run=args.dry_run)
        if report:
            logger.display_summary(_("Dry Run") if report.dry_run else _("Published"), report.summary())
    except PublisherError as e:
        logger.log("red", f"{_('ERROR')}: {e}")
        host.show_failure(format_failure(e))
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]" + _("Operation cancelled by user.") + "[/]")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
