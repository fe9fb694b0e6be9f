#!/usr/bin/env python3
"""
GitForm - save the layout of your local Git repositories and rebuild it anywhere.

'save' walks the git root (default: ~/GIT) and writes one descriptor file per repository
into the GitForm folder (default: ~/GIT/GitForm). Share that folder with another device and
run 'load' there: the missing folder structure is created and every repository is cloned
into the same place relative to the local git root.
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional

from .models import ResultReport
from .sync import ProjectMapper, ProjectBuilder
from .utils import DescriptorStore, Settings, calculate_default_workers

logger = logging.getLogger('gitform.main')


def main(argv: Optional[list] = None) -> int:
    """Entry point of the command line interface. Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 1

    _validate_arguments(parser, args)
    settings = _load_settings(args)

    if args.command == 'save':
        report = _save(settings)
    elif args.command == 'load':
        report = _load(settings, show_progress=not args.no_progress)
    elif args.command == 'info':
        _show_system_info(settings)
        return 0
    else:
        parser.print_help()
        return 1

    print(report.render())
    return 0 if report.successful else 1


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--git-root', type=Path, help='Root folder of the local repositories (default: ~/GIT)')
    common.add_argument('--git-form-root', type=Path,
                        help='Folder of the descriptor files (default: <git root>/GitForm)')
    common.add_argument('--home', type=Path, help='Home folder holding the .git-form settings (default: ~)')
    common.add_argument('--verbose', '-v', action='store_true', help='Log progress information')

    parser = argparse.ArgumentParser(
        prog='git-form',
        description='Saves your Git repositories and their structure as YAML files '
                    'and builds this whole on different devices.')
    parser.set_defaults(verbose=False)
    subparsers = parser.add_subparsers(dest='command', metavar='<command>')

    subparsers.add_parser('save', parents=[common],
                          help='saves the projects to GitForm folder as YAML files')

    load_parser = subparsers.add_parser('load', parents=[common],
                                        help='builds everything from YAMLs of GitForm folder')
    load_parser.add_argument('--workers', '-w', type=int,
                             help='Maximum number of parallel clones (default: auto-calculated)')
    load_parser.add_argument('--timeout', '-t', type=float,
                             help='Seconds after which a single clone is aborted (default: no limit)')
    load_parser.add_argument('--no-progress', action='store_true', help='Disable the progress bar')

    subparsers.add_parser('info', parents=[common], help='shows settings and system information')

    return parser


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _validate_arguments(parser: argparse.ArgumentParser, args):
    """Validate the command line arguments."""
    if getattr(args, 'workers', None) is not None and args.workers < 1:
        parser.error('--workers must be at least 1')

    if getattr(args, 'timeout', None) is not None and args.timeout <= 0:
        parser.error('--timeout must be positive')


def _load_settings(args) -> Settings:
    settings = Settings.defaults(args.home).init()

    if args.git_root:
        settings.git_root = args.git_root.expanduser()
        if not args.git_form_root and not settings.custom_git_form_root:
            settings.git_form_root = settings.git_root / 'GitForm'
    if args.git_form_root:
        settings.git_form_root = args.git_form_root.expanduser()
    if getattr(args, 'workers', None):
        settings.clone_workers = args.workers
    if getattr(args, 'timeout', None):
        settings.clone_timeout = args.timeout

    logger.info(f"Git root: {settings.git_root}, GitForm root: {settings.git_form_root}")
    return settings


def _save(settings: Settings) -> ResultReport:
    store = DescriptorStore(settings.git_form_root)
    return ProjectMapper(settings.git_root, store).save()


def _load(settings: Settings, show_progress: bool = True) -> ResultReport:
    store = DescriptorStore(settings.git_form_root)
    builder = ProjectBuilder(
        settings.git_root,
        store,
        max_workers=settings.effective_workers(),
        clone_timeout=settings.clone_timeout,
        show_progress=show_progress,
    )
    return builder.load()


def _show_system_info(settings: Settings):
    """Show the settings, system information and recommendations."""
    print("=== SETTINGS ===")
    print(f"📁 Git root: {settings.git_root}")
    print(f"📄 GitForm root: {settings.git_form_root}")
    print(f"⚙️  Settings file: {settings.settings_file}")
    print(f"⏱️  Clone timeout: {settings.clone_timeout or 'none'}")

    print("\n=== SYSTEM ===")
    try:
        import psutil
        print(f"💻 CPU: {psutil.cpu_count()} core")
        memory = psutil.virtual_memory()
        print(f"🧠 RAM available: {memory.available / (1024**3):.1f} GB")
    except Exception as e:
        print(f"⚠️ System information not available: {e}")

    try:
        from git import Git
        version = '.'.join(str(part) for part in Git().version_info)
        print(f"🔧 git: {version}")
    except Exception as e:
        print(f"❌ git not available: {e}")

    print("\n=== RECOMMENDATIONS ===")
    workers = settings.clone_workers or calculate_default_workers()
    print(f"🚀 Parallel clones: --workers {workers}")


if __name__ == "__main__":
    sys.exit(main())
