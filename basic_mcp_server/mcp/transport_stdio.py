"""stdio transport for MCP: one JSON-RPC message per line."""

import asyncio
import io
import sys
from typing import IO, TextIO

from basic_mcp_server.mcp.errors import INTERNAL_ERROR, make_error_data
from basic_mcp_server.mcp.jsonrpc import JsonRpcProcessor
from basic_mcp_server.mcp.models import JsonRpcError, JsonRpcResponse
from basic_mcp_server.utils.logging import get_logger, set_request_id


class StdioTransport:
    """Serve line-delimited JSON-RPC over a pair of streams.

    Frames are handled strictly one at a time: a frame is read, processed to
    completion and its response written before the next frame is read. This
    keeps responses in request order.

    The input may be a binary stream (frames are then decoded strictly as
    UTF-8 by the processor) or a text stream.
    """

    def __init__(
        self,
        processor: JsonRpcProcessor,
        input_stream: IO | None = None,
        output_stream: TextIO | None = None,
    ):
        self.processor = processor
        self._input = input_stream or sys.stdin.buffer
        self._output = output_stream or sys.stdout
        self.frames_read = 0
        self.responses_written = 0
        self.log = get_logger("stdio")

    async def read_frame(self) -> str | bytes | None:
        """Read the next non-blank line, or None at end of input."""
        while True:
            line = await asyncio.to_thread(self._input.readline)
            if not line:
                return None
            line = line.strip()
            if line:
                return line

    def write_frame(self, response: JsonRpcResponse) -> None:
        """Write one response as a single line and flush it."""
        self._output.write(self.processor.serialize_response(response) + "\n")
        self._output.flush()
        self.responses_written += 1

    async def handle_frame(self, frame: str | bytes) -> JsonRpcResponse | None:
        """Process one frame; a fault here still answers the frame."""
        try:
            return await self.processor.handle_message(frame)
        except Exception as e:
            self.log.error("Unhandled error processing frame", exc_info=True)
            return JsonRpcResponse(
                id=None,
                error=JsonRpcError(
                    **make_error_data(INTERNAL_ERROR, str(e) or type(e).__name__)
                ),
            )

    async def serve(self) -> None:
        """Process frames until the input stream is closed."""
        self.log.info("Serving on stdio")
        while True:
            frame = await self.read_frame()
            if frame is None:
                break

            self.frames_read += 1
            set_request_id(f"frame-{self.frames_read}")

            response = await self.handle_frame(frame)
            if response is None:
                # Notification
                continue
            self.write_frame(response)

        self.log.info(
            "Input closed",
            frames_read=self.frames_read,
            responses_written=self.responses_written,
        )


def open_stdio_streams() -> tuple[IO[bytes], TextIO]:
    """Raw stdin bytes for input, UTF-8 text stdout for output."""
    stdout = io.TextIOWrapper(
        sys.stdout.buffer, encoding="utf-8", newline="\n", write_through=True
    )
    return sys.stdin.buffer, stdout


async def serve_stdio(processor: JsonRpcProcessor) -> None:
    """Run the stdio transport on the process streams."""
    stdin, stdout = open_stdio_streams()
    await StdioTransport(processor, stdin, stdout).serve()
