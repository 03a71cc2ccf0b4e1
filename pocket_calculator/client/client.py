"""TCP client."""
import codecs
from pathlib import Path
import socket

from pydantic import BaseModel, ConfigDict, Field, IPvAnyAddress

from pocket_calculator.common.logger import logger


class SessionClient(BaseModel):
    """
    TCP client that plays a keystroke script against the session server.

    The TCP client:
    - reads keys, one per line, from a plain text file
    - sends them to the server over a TCP socket
    - receives the session transcript
    - writes the transcript into an output file
    """

    # Make the Pydantic instance immutable (read-only), to prevent errors
    # that could be caused by changes to the network configuration during execution.
    model_config = ConfigDict(frozen=True)

    host: IPvAnyAddress = Field(default="127.0.0.1", description="Server host address")
    port: int = Field(default=9000, ge=1, le=65535, description="Server TCP port")

    def send_file(self, input_file: Path, output_file: Path) -> None:
        """
        Send a keystroke script to the server and write the returned transcript to an output file.

        :param Path input_file: Path to the ``.txt`` keystroke script
        :param Path output_file: Path where the transcript will be written

        :return: None
        :raises ValueError: If the input file is not a ``.txt`` file
        """
        if input_file.suffix != ".txt":
            raise ValueError(f"📄❌ Unsupported keystroke script format: {input_file.suffix}")
        content = input_file.read_text(encoding="utf-8")

        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.connect((str(self.host), self.port))
            s.sendall(content.encode())
            # Signal that no more keys will be sent
            s.shutdown(socket.SHUT_WR)
            logger.info(f"⌨️ Sent {input_file.name} to {self.host}:{self.port}")

            # Display symbols are multi-byte and may be split across chunks
            decoder = codecs.getincrementaldecoder("utf-8")()
            with output_file.open("w", encoding="utf-8") as f_out:
                while True:
                    # An empty chunk means the server closed the connection
                    chunk = s.recv(4096)
                    if not chunk:
                        f_out.write(decoder.decode(b"", final=True))
                        break
                    f_out.write(decoder.decode(chunk))
                    # Keep progress on disk if the process is interrupted
                    f_out.flush()
