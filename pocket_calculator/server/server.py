"""TCP server that replays keystrokes through a calculator and reports the display after each one."""
from pathlib import Path
import socket
from typing import List, Literal, TextIO, Union

from pydantic import BaseModel, Field, IPvAnyAddress

from pocket_calculator.common.keymap import translate_key
from pocket_calculator.common.logger import logger
from pocket_calculator.expression.calculator import ExpressionCalculator
from pocket_calculator.keypad.calculator import KeypadCalculator

Calculator = Union[KeypadCalculator, ExpressionCalculator]


class SessionServer(BaseModel):
    """
    TCP socket server acting as the display surface of one calculator.

    Features:
        - Receives one key (button label or key name) per line.
        - Creates a fresh calculator for every client session.
        - Writes one transcript line per key to disk as soon as it is applied.
        - Sends the whole transcript back to the client.
    """

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=9000, ge=1, le=65535, description="Server TCP port")
    output_file: Path = Field(..., description="Path to write the session transcript")
    mode: Literal["keypad", "expression"] = Field(default="keypad", description="Calculator variant to run")

    def _receive_data(self, conn: socket.socket) -> List[str]:
        """
        Receive all data from the client connection and return non-empty lines.

        :param socket.socket conn: Connected client socket

        :return: List of non-empty key lines
        :rtype: List[str]
        """
        # Note: chunks are small pieces of data read from a TCP stream, as data may arrive in multiple packets
        chunks: List[bytes] = []
        while True:
            chunk: bytes = conn.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
        data: List[str] = b"".join(chunks).decode().splitlines()
        # Remove empty lines
        return [line.strip() for line in data if line.strip()]

    def _new_calculator(self) -> Calculator:
        """Create the calculator for a new session, according to the configured mode."""
        if self.mode == "expression":
            return ExpressionCalculator()
        return KeypadCalculator()

    def _replay(self, keys: List[str], f_out: TextIO) -> Calculator:
        """
        Apply keys one by one to a fresh calculator and write the display after each key.

        Keys that cannot be translated are reported in the transcript and skipped.

        :param list keys: Key names in the order they were pressed
        :param file f_out: Open file handle for writing the transcript

        :return: Calculator in its final state
        :rtype: Union[KeypadCalculator, ExpressionCalculator]
        """
        calculator = self._new_calculator()
        for key in keys:
            try:
                action, payload = translate_key(key, self.mode)
                display = calculator.handle(action, payload)
            except ValueError as exc:
                logger.error(f"⌨️❌ Rejected key {key!r}: {exc}")
                f_out.write(f"{key} -> ERROR: {exc}\n")
            else:
                f_out.write(f"{key} -> {display}\n")
            f_out.flush()
        return calculator

    def start(self) -> None:
        """
        Start the TCP server, accept a client session, and replay its keys.

        Steps:
            1. Bind and listen on the specified host and port.
            2. Accept a single client connection.
            3. Receive all keys from the client.
            4. Replay them through a fresh calculator, writing the transcript.
            5. Send the transcript back to the client.

        :return: None
        """
        logger.info(f"🖥️ Starting {self.mode} session server on {self.host}:{self.port}")

        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind((str(self.host), self.port))
            s.listen()
            logger.info("🖥️ Server listening")

            # Accept a single client connection
            conn, _ = s.accept()
            with conn:
                keys: List[str] = self._receive_data(conn)
                with self.output_file.open("w", encoding="utf-8") as f_out:
                    calculator = self._replay(keys, f_out)
                logger.info(f"🧮 Session finished after {len(keys)} keys, display: {calculator.display!r}")

                # Send transcript back to client
                try:
                    conn.sendall(self.output_file.read_bytes())
                    logger.info("✉️ Transcript sent to client")
                except OSError as exc:
                    logger.error(f"🔌❌ Client disconnected before receiving the transcript: {exc}")
