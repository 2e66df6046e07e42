"""Function entry point bridging an invocation event to PHP.

The file is installed next to the deployed project and referenced from
`serverless.yml` as `handler.handle`. Each invocation runs
`php bref.php '<event as JSON>'`, forwards PHP's output to the function logs and
returns the JSON value PHP wrote to the result file.

Environment variables:
    LAMBDA_TASK_ROOT: Root of the deployed project, PHP is in `.bref/bin`
    TMP_DIRECTORY: Directory of the result file (default `/tmp/.bref`)
    PHP_HANDLER: PHP script to run (default `bref.php`)

The child receives the result file path in BREF_OUTPUT_FILE.

Only the standard library is used: this file runs where bref-deploy is not
installed.
"""

import asyncio
import codecs
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

logger = logging.getLogger("bref")
logger.setLevel(logging.INFO)

PHP_BINARY = "php"
DEFAULT_TMP_DIRECTORY = "/tmp/.bref"
DEFAULT_PHP_HANDLER = "bref.php"
OUTPUT_FILE_NAME = "output.json"
CHUNK_SIZE = 65536


class RuntimeInvocationError(Exception):
    """Raised when the PHP process exits with a non-zero code."""

    def __init__(self, exit_code: int) -> None:
        self.exit_code = exit_code
        super().__init__(f"PHP exit code: {exit_code}")


class RuntimeBridge:
    """Run one PHP process per event and collect its result.

    Invocations must not overlap: the result file path is shared by all of
    them.
    """

    def __init__(
        self,
        tmp_directory: Path,
        php_handler: str = DEFAULT_PHP_HANDLER,
        php_binary: str = PHP_BINARY,
        env: dict[str, str] | None = None,
    ) -> None:
        self.tmp_directory = tmp_directory
        self.output_file = tmp_directory / OUTPUT_FILE_NAME
        self.php_handler = php_handler
        self.php_binary = php_binary
        self.env = env

    @classmethod
    def from_environment(cls) -> "RuntimeBridge":
        env = dict(os.environ)
        runtime_bin = os.path.join(env.get("LAMBDA_TASK_ROOT", ""), ".bref", "bin")
        env["PATH"] = env.get("PATH", "") + os.pathsep + runtime_bin
        return cls(
            tmp_directory=Path(env.get("TMP_DIRECTORY") or DEFAULT_TMP_DIRECTORY),
            php_handler=env.get("PHP_HANDLER") or DEFAULT_PHP_HANDLER,
            php_binary=PHP_BINARY,
            env=env,
        )

    def reset(self) -> None:
        """Remove the result of the previous invocation."""
        if self.output_file.exists():
            self.output_file.unlink()
        else:
            self.tmp_directory.mkdir(parents=True, exist_ok=True)

    async def invoke(self, event: Any) -> Any:
        self.reset()

        env = dict(self.env if self.env is not None else os.environ)
        env["BREF_OUTPUT_FILE"] = str(self.output_file)
        process = await asyncio.create_subprocess_exec(
            self.php_binary,
            self.php_handler,
            json.dumps(event),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
        )
        assert process.stdout is not None and process.stderr is not None
        await asyncio.gather(
            _forward(process.stdout, ""),
            _forward(process.stderr, "[STDERR] "),
        )
        exit_code = await process.wait()
        if exit_code != 0:
            raise RuntimeInvocationError(exit_code)

        if not self.output_file.exists():
            return None
        return json.loads(self.output_file.read_text(encoding="utf-8"))


async def _forward(stream: asyncio.StreamReader, prefix: str) -> None:
    # Multi-byte characters may be split across reads.
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while chunk := await stream.read(CHUNK_SIZE):
        text = decoder.decode(chunk)
        if text:
            logger.info("%s%s", prefix, text.rstrip("\n"))
    tail = decoder.decode(b"", final=True)
    if tail:
        logger.info("%s%s", prefix, tail.rstrip("\n"))


def _ensure_log_handler() -> None:
    """Print records when the host did not configure logging.

    The function runtime installs a root handler; outside of it INFO records
    would otherwise only reach `logging.lastResort`, which drops them.
    """
    if not logging.getLogger().handlers and not logger.handlers:
        logger.addHandler(logging.StreamHandler(sys.stdout))


def handle(event: Any, context: Any) -> Any:
    """Function handler: run PHP for `event` and return its result."""
    _ensure_log_handler()
    return asyncio.run(RuntimeBridge.from_environment().invoke(event))
