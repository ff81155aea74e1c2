"""
mysqldump invocation for Schema Dumper.

The dump engine only talks to the ``Exporter`` interface, so plans can be
run against a fake exporter in tests.
"""

import logging
import os
import re
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Optional

from .errors import ExportError, ExportErrorKind
from .models import ConnectionParams, DumpItem, ExportResult
from .utils import strip_definer

VIEWS_RESULT_NAME = "<views>"


class Exporter(ABC):
    """Narrow capability that turns dump instructions into SQL bytes."""

    @abstractmethod
    def export_table(self, item: DumpItem) -> ExportResult:
        """Dump the rows of one table, restricted by the item's row filter."""

    @abstractmethod
    def export_views(self, views: list[str]) -> ExportResult:
        """Dump the structure of the given views with definers stripped."""


class MysqldumpExporter(Exporter):
    """Runs the mysqldump binary with an argument list, never through a shell."""

    BASE_OPTIONS = ('--lock-tables=false', '--compact')

    # Options that would write elsewhere, read other credentials, load client
    # plugins or change which objects are dumped. mysqldump accepts any
    # unambiguous prefix of a long option and treats "_" like "-".
    FORBIDDEN_OPTIONS = frozenset({
        'result-file',
        'tab',
        'databases',
        'all-databases',
        'defaults-file',
        'defaults-extra-file',
        'login-path',
        'plugin-dir',
        'default-auth',
    })
    FORBIDDEN_SHORT_OPTIONS = frozenset({'-r', '-T', '-B', '-A'})
    OPTION_PREFIXES = ('loose-', 'maximum-', 'enable-')
    OPTION_PATTERN = re.compile(r'^(--[A-Za-z][A-Za-z0-9_-]*(=.*)?|-[A-Za-z])$', re.DOTALL)

    def __init__(
        self,
        params: ConnectionParams,
        binary: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.params = params
        self.binary = binary
        self.timeout = timeout

    def find_binary(self) -> str:
        """
        Locate mysqldump.

        An explicit path wins; otherwise PATH is searched.
        """
        if self.binary:
            path = os.path.expandvars(os.path.expanduser(self.binary))
            if os.path.isfile(path):
                return path
            raise ExportError(
                ExportErrorKind.INVOCATION_FAILED,
                f"Provided mysqldump path not found: {path}"
            )

        found = shutil.which('mysqldump')
        if found:
            return found
        raise ExportError(
            ExportErrorKind.INVOCATION_FAILED,
            "mysqldump executable not found. Provide --mysqldump-path or install the MySQL client tools."
        )

    def connection_args(self) -> list[str]:
        """Connection options shared by every invocation."""
        args = [
            '--host', self.params.host,
            '--port', str(self.params.port),
            '--user', self.params.user,
        ]
        if self.params.ssl_ca:
            args += ['--ssl-ca', self.params.ssl_ca]
        return args

    def process_env(self) -> Optional[dict[str, str]]:
        """Environment for mysqldump; the password never goes on argv."""
        if not self.params.password:
            return None
        env = dict(os.environ)
        env['MYSQL_PWD'] = self.params.password
        return env

    @classmethod
    def is_forbidden(cls, token: str) -> bool:
        """Check an option token against the forbidden options, as mysqldump would resolve it."""
        if not token.startswith('--'):
            return token in cls.FORBIDDEN_SHORT_OPTIONS

        name = token[2:].split('=', 1)[0].replace('_', '-')
        stripped = True
        while stripped:
            stripped = False
            for prefix in cls.OPTION_PREFIXES:
                if name.startswith(prefix):
                    name = name[len(prefix):]
                    stripped = True
        return any(option.startswith(name) for option in cls.FORBIDDEN_OPTIONS)

    @classmethod
    def parse_extra_flags(cls, flags: str, table: Optional[str] = None) -> list[str]:
        """
        Split configured flags into argv tokens and validate them.

        Every token must be a single option; positional arguments and options
        that redirect output or swap the dump target are rejected.
        """
        try:
            tokens = shlex.split(flags)
        except ValueError as e:
            raise ExportError(ExportErrorKind.INVALID_FLAGS, f"Cannot parse flags {flags!r}: {e}", table) from e

        for token in tokens:
            if not cls.OPTION_PATTERN.match(token):
                raise ExportError(
                    ExportErrorKind.INVALID_FLAGS,
                    f"Flag {token!r} is not a mysqldump option",
                    table
                )
            if cls.is_forbidden(token):
                raise ExportError(
                    ExportErrorKind.INVALID_FLAGS,
                    f"Flag {token!r} is not allowed in table overrides",
                    table
                )
        return tokens

    def build_table_command(self, item: DumpItem) -> list[str]:
        """Build the argv for dumping one table."""
        cmd = [self.find_binary(), *self.BASE_OPTIONS, *self.connection_args()]
        cmd.append(f'--where={item.row_filter}')
        cmd += self.parse_extra_flags(item.extra_flags, item.table_name)
        cmd += ['--', self.params.database, item.table_name]
        return cmd

    def build_views_command(self, views: list[str]) -> list[str]:
        """Build the argv for dumping the structure of all views."""
        return [
            self.find_binary(), *self.connection_args(),
            '--no-data', '--', self.params.database, *views
        ]

    def _run(self, cmd: list[str], name: str) -> ExportResult:
        logging.debug(f"Cmd: {' '.join(shlex.quote(c) for c in cmd)}")
        try:
            proc = subprocess.run(cmd, capture_output=True, timeout=self.timeout, env=self.process_env())
        except FileNotFoundError as e:
            raise ExportError(ExportErrorKind.INVOCATION_FAILED, f"mysqldump not found: {e}", name) from e
        except subprocess.TimeoutExpired as e:
            raise ExportError(ExportErrorKind.INVOCATION_FAILED, "mysqldump timed out.", name) from e
        except OSError as e:
            raise ExportError(ExportErrorKind.INVOCATION_FAILED, f"Could not run mysqldump: {e}", name) from e

        return ExportResult(
            table_name=name,
            stdout_bytes=proc.stdout,
            stderr_text=proc.stderr.decode('utf-8', errors='replace'),
            failed=proc.returncode != 0,
            returncode=proc.returncode
        )

    def export_table(self, item: DumpItem) -> ExportResult:
        return self._run(self.build_table_command(item), item.table_name)

    def export_views(self, views: list[str]) -> ExportResult:
        if not views:
            return ExportResult(table_name=VIEWS_RESULT_NAME, returncode=0)

        result = self._run(self.build_views_command(views), VIEWS_RESULT_NAME)
        result.stdout_bytes = strip_definer(result.stdout_bytes)
        return result
