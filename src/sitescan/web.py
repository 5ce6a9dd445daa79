from __future__ import annotations

import argparse
import logging
from textwrap import dedent
from typing import Any, Dict

from flask import Flask, Response, jsonify, request

from .extract import DEFAULT_TIMEOUT
from .scan import scan_url, score_signals
from .signals import SiteSignals

logger = logging.getLogger(__name__)

MAX_URL_LENGTH = 2048
MAX_TIMEOUT = 30.0


def _clean_string(value: Any, *, max_length: int) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    value = value.replace("\r", " ").replace("\n", " ").replace("\t", " ")
    cleaned = "".join(ch for ch in value if ch.isprintable()).strip()
    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length].strip()
    return cleaned


def sanitize_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return float(DEFAULT_TIMEOUT)
    if timeout <= 0:
        return float(DEFAULT_TIMEOUT)
    return min(timeout, MAX_TIMEOUT)


def create_app() -> Flask:
    app = Flask(__name__)

    @app.get("/")
    def index() -> Response:
        html = dedent(
            """
            <!doctype html>
            <html lang="en">
            <head>
              <meta charset="utf-8" />
              <meta name="viewport" content="width=device-width, initial-scale=1" />
              <title>Site Scan</title>
              <style>
                body { margin:0; font: 14px/1.45 system-ui, sans-serif; background:#0c0d0f; color:#e8e8ea; }
                main { max-width: 880px; margin: 0 auto; padding: 28px 24px; display:grid; gap:16px; }
                input { width:100%; padding:10px 12px; border-radius:8px; border:1px solid #23262b; background:#11131a; color:inherit; }
                button { padding:10px 16px; border-radius:8px; border:0; background:#4f7cff; color:#fff; cursor:pointer; }
                pre { white-space: pre-wrap; background:#15171a; border:1px solid #202328; border-radius:12px; padding:18px; }
              </style>
            </head>
            <body>
              <main>
                <h1>Page quality &amp; SALT anchor scan</h1>
                <input id="url" type="url" placeholder="https://example.com" />
                <button id="scan">Scan</button>
                <div id="status"></div>
                <pre id="out"></pre>
              </main>
              <script>
              const $ = (id) => document.getElementById(id);
              $('scan').addEventListener('click', async () => {
                $('status').textContent = 'Scanning...';
                try {
                  const res = await fetch('/api/scan', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({ url: $('url').value }),
                  });
                  const data = await res.json();
                  if (!res.ok) { throw new Error(data.error || `Request failed with status ${res.status}`); }
                  $('status').textContent = data.error ? `Degraded: ${data.error}` : `Score ${data.pq_score} (${data.pq_bucket})`;
                  $('out').textContent = data.facts;
                } catch (e) {
                  $('status').textContent = e.message || 'Error running scan.';
                }
              });
              </script>
            </body>
            </html>
            """
        ).strip()
        return Response(html, mimetype="text/html")

    @app.post("/api/scan")
    def api_scan():
        payload: Dict[str, Any] = request.get_json(silent=True) or {}
        url = _clean_string(payload.get("url"), max_length=MAX_URL_LENGTH)
        if not url:
            return jsonify({"error": "url is required"}), 400
        timeout = sanitize_timeout(payload.get("timeout"))
        try:
            result = scan_url(url, timeout=timeout)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.exception("scan of %s failed", url)
            return jsonify({"error": str(e) or "Unknown error"}), 500
        return jsonify(result.to_dict())

    @app.post("/api/score")
    def api_score():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "JSON object body is required"}), 400
        try:
            signals = SiteSignals.from_dict(payload)
            return jsonify(score_signals(signals))
        except (TypeError, ValueError) as e:
            return jsonify({"error": str(e)}), 400

    return app


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the site scan web UI")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5173)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
