"""
Main entrypoint.

This script:
- Starts the session server process
- Launches a client against it
- Plays the keystroke script provided as argument

The transcript (display after every key) is written next to the input file.
"""

from multiprocessing import Process
from pathlib import Path
import tempfile
import time
import argparse
from typing import Literal

from pydantic import BaseModel, Field, FilePath, ValidationError

from pocket_calculator.client.client import SessionClient
from pocket_calculator.common.logger import logger
from pocket_calculator.server.server import SessionServer


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath
        Path to the keystroke script, one key per line.
    mode : str
        Calculator variant, ``keypad`` or ``expression``.
    port : int
        TCP port shared by the server and the client.
    """

    file_path: FilePath
    mode: Literal["keypad", "expression"] = "keypad"
    port: int = Field(default=9000, ge=1, le=65535)


def run_server(output_file: Path, mode: str, port: int) -> None:
    """
    Start the session server.

    The server runs in its own process and listens
    for a single incoming socket connection.
    """
    server = SessionServer(output_file=output_file, mode=mode, port=port)
    server.start()


def parse_args(argv=None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Argument list, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Replay a keystroke script through a calculator session"
    )
    parser.add_argument(
        "file_path",
        help="Path to the file containing one key per line",
    )
    parser.add_argument(
        "--mode",
        default="keypad",
        help="Calculator variant: keypad (default) or expression",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=9000,
        help="TCP port used by the session server",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(file_path=args.file_path, mode=args.mode, port=args.port)
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the transcript path based on the input file.

    Examples
    --------
    input: scripts/chaining.txt
    output: scripts/chaining_results.txt

    :param input_path: Path to the keystroke script
    :return: Path to the transcript file
    """
    return input_path.with_name(f"{input_path.stem}_results.txt")


def main(argv=None) -> None:
    """
    Main function.
    """
    cli_args = parse_args(argv)
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = build_output_path(input_path)

    # The server keeps its own copy of the transcript, discarded once the client has it
    with tempfile.TemporaryDirectory() as tmpdir:
        session_path: Path = Path(tmpdir) / "session.txt"
        server_process = Process(target=run_server, args=(session_path, cli_args.mode, cli_args.port))
        server_process.start()

        # Give the server time to start listening
        time.sleep(1)

        try:
            client = SessionClient(port=cli_args.port)
            client.send_file(input_path, output_path)
            logger.info(f"📄 Transcript written to {output_path}")
        finally:
            # Ensure the server is always stopped before its directory is removed
            server_process.terminate()
            server_process.join()


if __name__ == "__main__":
    main()
