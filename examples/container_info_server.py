#!/usr/bin/env python3
"""
Minimal stdlib HTTP server exposing the container snapshot without FastAPI.

Endpoints:
  GET /api/info/container -> snapshot JSON

Run:
  python examples/container_info_server.py --host 127.0.0.1 --port 9020
Then point the monitoring front end at http://127.0.0.1:9020/api/info/container.
"""
from http.server import BaseHTTPRequestHandler, HTTPServer
import argparse

from containerinfo.snapshot import SnapshotBuilder, SnapshotError


builder = SnapshotBuilder()


class Handler(BaseHTTPRequestHandler):
    def _send(self, code: int, body: str):
        data = body.encode("utf-8")
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def do_GET(self):  # noqa: N802
        if self.path != "/api/info/container":
            self._send(404, '{"error": "Not found"}')
            return
        try:
            self._send(200, builder.render())
        except SnapshotError:
            self._send(500, '{"error": "snapshot failed"}')


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=9020)
    args = ap.parse_args()
    httpd = HTTPServer((args.host, args.port), Handler)
    print(f"Container info on http://{args.host}:{args.port}/api/info/container")
    httpd.serve_forever()


if __name__ == "__main__":
    main()
