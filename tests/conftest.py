"""Pytest configuration and a fake Yeelight bulb for network tests."""

from __future__ import annotations

import json
import logging
import socketserver
import threading

import pytest

_LOGGER = logging.getLogger(__name__)


class _BulbHandler(socketserver.StreamRequestHandler):
    """Reads one command line and answers it the way the bulb does."""

    def handle(self) -> None:
        bulb: FakeBulb = self.server.bulb  # type: ignore[attr-defined]
        line = self.rfile.readline()
        if not line:
            return
        text = line.decode("utf-8")
        bulb.received.append(text)
        _LOGGER.debug("Fake bulb got %r", text)

        if bulb.hang:
            bulb.release.wait(5)
            return

        for chunk in bulb.reply_for(text):
            self.wfile.write(chunk)
            self.wfile.flush()


class FakeBulb:
    """A fake Yeelight bulb listening on localhost.

    Simulates the LAN control interface:
    - get_prop answers from ``props`` (empty string for unknown names)
    - unknown methods get an error reply
    - everything else answers ``["ok"]``

    ``raw_reply`` overrides the answer with fixed bytes, ``hang`` makes the
    bulb accept the command and never reply.
    """

    SUPPORTED = {
        "get_prop", "set_ct_abx", "set_rgb", "set_hsv", "set_bright",
        "set_power", "toggle", "set_default", "start_cf", "stop_cf",
        "set_scene", "cron_add", "cron_get", "cron_del", "set_adjust",
        "set_name",
    }

    def __init__(self) -> None:
        self.props: dict[str, str] = {
            "power": "on",
            "bright": "100",
            "ct": "4000",
            "rgb": "16711680",
            "hue": "0",
            "sat": "100",
            "color_mode": "2",
            "flowing": "0",
            "delayoff": "0",
            "music_on": "0",
            "name": "desk",
        }
        self.received: list[str] = []
        self.raw_reply: list[bytes] | None = None
        self.hang = False
        self.release = threading.Event()

        self._server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), _BulbHandler)
        self._server.daemon_threads = True
        self._server.bulb = self  # type: ignore[attr-defined]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def host(self) -> str:
        return "127.0.0.1"

    @property
    def port(self) -> int:
        return self._server.server_address[1]

    @property
    def requests(self) -> list[dict]:
        return [json.loads(line) for line in self.received]

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self.release.set()
        self._server.shutdown()
        self._server.server_close()

    def reply_for(self, line: str) -> list[bytes]:
        if self.raw_reply is not None:
            return self.raw_reply
        request = json.loads(line)
        if request["method"] not in self.SUPPORTED:
            response = {
                "id": request["id"],
                "error": {"code": -1, "message": "unsupported method"},
            }
        elif request["method"] == "get_prop":
            response = {
                "id": request["id"],
                "result": [self.props.get(name, "") for name in request["params"]],
            }
        else:
            response = {"id": request["id"], "result": ["ok"]}
        return [json.dumps(response).encode("utf-8") + b"\r\n"]


@pytest.fixture
def fake_bulb():
    """Start a fake bulb on an ephemeral port."""
    bulb = FakeBulb()
    bulb.start()
    yield bulb
    bulb.stop()
