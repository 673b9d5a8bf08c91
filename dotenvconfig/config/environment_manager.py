#!/usr/bin/env python3
"""
Environment Configuration Manager

This module loads the selected ``<profile>.env`` file straight into an
environment store (the process environment by default). A key that is already
set is never overwritten, so variables exported by the shell or the deployment
platform always win over file defaults. It also provides the ``dotenvconfig``
command-line entry point.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config_loader import DEFAULT_SELECTOR_KEY, Config, ConfigLoader, LoaderOptions
from .exceptions import ConfigError, EnvironmentWriteError
from .stores import DirectoryFileStore, EnvironmentStore, FileStore, OsEnvironment


class EnvironmentManager:
    """Folds a ``.env`` file into an environment store."""

    def __init__(
        self,
        file_store: Optional[FileStore],
        options: Optional[LoaderOptions] = None,
        env: Optional[EnvironmentStore] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the environment manager."""
        self.loader = ConfigLoader(file_store, options, env=env, logger=logger)
        self.options = self.loader.options
        self.env = self.loader.env
        self.logger = self.loader.logger
        self.file_name: Optional[str] = None

    def load(self) -> Dict[str, str]:
        """
        Load the selected file into the environment store.

        Callers must serialize concurrent calls: the check-then-set per key
        is not atomic.

        A failed write aborts the load but does not roll back. Keys written
        before the failing one stay in the environment store.

        Returns:
            The keys that were written, with their values
        """
        file_name, values = self.loader.read()
        written: Dict[str, str] = {}

        for key, value in values.items():
            if key in self.env:
                self.logger.debug(f"{key} already set, keeping existing value")
                continue
            try:
                self.env.set(key, value)
            except EnvironmentWriteError as e:
                self.logger.error(str(e))
                raise
            written[key] = value

        self.file_name = file_name
        self.logger.info(f"set {len(written)} of {len(values)} variables from {file_name}")
        return written

    def config(self) -> Config:
        """Read accessors over the environment store alone."""
        return Config(
            values={},
            env=self.env,
            file_name=self.file_name or "",
            must=self.options.must,
            context_key=self.options.context_key,
            logger=self.logger,
        )

    def get(self, key: str) -> str:
        return self.config().get(key)

    def get_as_int(self, key: str) -> int:
        return self.config().get_as_int(key)

    def must_get(self, key: str) -> str:
        return self.config().must_get(key)

    def must_get_as_int(self, key: str) -> int:
        return self.config().must_get_as_int(key)


def load_env(
    directory: Any = ".",
    environment: str = "",
    env: Optional[EnvironmentStore] = None,
    **options: Any,
) -> Dict[str, str]:
    """Load ``<profile>.env`` from ``directory`` into the environment in one call."""
    opts = LoaderOptions.from_mapping({"fallback": environment, **options})
    return EnvironmentManager(DirectoryFileStore(directory), opts, env=env).load()


def create_report(config: Config, options: LoaderOptions, env: EnvironmentStore) -> Dict[str, Any]:
    """Describe how the configuration was resolved."""
    return {
        'profile': config.profile,
        'file': config.file_name,
        'selector_key': options.selector_key,
        'selector_key_set': options.selector_key in env,
        'fallback': options.fallback,
        'values': config.as_dict(),
        'overridden_by_environment': sorted(
            key for key in config.keys() if env.get(key) and env.get(key) != config.values[key]
        ),
        'generated_at': datetime.now().isoformat(),
    }


def main(argv=None):
    """Main function for command-line usage."""
    parser = argparse.ArgumentParser(description='Load and inspect .env configuration profiles')
    parser.add_argument('--dir', default='.', help='Directory containing the .env files')
    parser.add_argument('--env', default='', help='Profile to use when the selector variable is unset')
    parser.add_argument('--selector-key', default=DEFAULT_SELECTOR_KEY,
                        help='Environment variable naming the profile')
    parser.add_argument('--get', metavar='KEY', help='Print a single resolved value')
    parser.add_argument('--report', help='Write a YAML resolution report to file')
    parser.add_argument('--verbose', action='store_true', help='Log profile selection and loading')
    parser.add_argument('--json-logs', action='store_true', help='Log as JSON')

    args = parser.parse_args(argv)

    options = LoaderOptions(
        selector_key=args.selector_key,
        fallback=args.env,
        logging_enabled=args.verbose,
        log_format='json' if args.json_logs else 'text',
    )
    env = OsEnvironment()
    loader = ConfigLoader(DirectoryFileStore(Path(args.dir)), options, env=env)

    try:
        config = loader.load()
        if args.get:
            print(config.get(args.get))
        elif args.report:
            report = create_report(config, options, env)
            with open(args.report, 'w') as f:
                yaml.safe_dump(report, f, default_flow_style=False)
            print(f"Configuration report saved to {args.report}")
        else:
            print(f"# profile: {config.profile}")
            for key, value in sorted(config.as_dict().items()):
                print(f"{key}={value}")
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
