"""
main.py — Sorting Visualizer Flask App
=======================================
The web server that plays the Renderer/UI role for the core.

Routes:
  GET  /                  – main UI
  POST /api/generate      – new random array            {size, seed}
  POST /api/custom        – user-supplied array          {values | text, size}
  POST /api/start         – start a run                  {algorithm, speed_ms}
  POST /api/pause         – toggle pause / resume
  POST /api/step          – one primitive while paused
  POST /api/stop          – stop the current run
  POST /api/speed         – change the step interval     {speed_ms | preset}
  GET  /api/state         – snapshot + rendered SVG (the page polls this)
  GET  /api/algorithms    – registry metadata
  POST /api/config/algo   – select the algorithm shown in the side panels
  POST /api/compare       – headless run of two algorithms on the current array

State management:
  Each browser session gets its own RunController, kept in-memory in
  SESSIONS and keyed by an id stored in the Flask session cookie.  At
  most CONFIG.max_sessions are kept; the least recently used one is
  stopped and dropped to make room.  The
  sort itself runs on the controller's worker thread; requests only
  flip its signals and read snapshots.
"""

import logging
import secrets
import threading
from collections import OrderedDict

from flask import Flask, jsonify, render_template_string, request, session

from algorithms import get_algorithm, list_algorithms
from config import load_config
from engine import Recorder, RunController, compare
from errors import InvalidValueError, SortVisualizerError
from model import parse_values
from ui import (
    algorithm_info,
    algorithm_selector,
    array_generator,
    comparison_panel,
    explanation_panel,
    playback_controls,
    pseudocode_viewer,
    render_bars,
    stats_panel,
)

logger = logging.getLogger(__name__)

CONFIG = load_config()

app = Flask(__name__)
app.secret_key = secrets.token_hex(32)

SESSIONS: "OrderedDict[str, RunController]" = OrderedDict()
_sessions_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Session Helpers
# ---------------------------------------------------------------------------
def get_controller() -> RunController:
    """Return this browser's controller, creating one with a fresh array."""
    sid = session.get("sid")
    with _sessions_lock:
        ctrl = SESSIONS.get(sid) if sid else None
        if ctrl is not None:
            SESSIONS.move_to_end(sid)
            return ctrl
        while len(SESSIONS) >= CONFIG.max_sessions:
            old_sid, old = SESSIONS.popitem(last=False)
            old.stop()
            logger.info("session %s evicted", old_sid)
        sid = secrets.token_hex(8)
        ctrl = RunController(CONFIG)
        ctrl.generate()
        SESSIONS[sid] = ctrl
        session["sid"] = sid
        logger.debug("new session %s", sid)
    return ctrl


def state_payload(ctrl: RunController) -> dict:
    snap = ctrl.snapshot()
    step = snap["step"]
    snap["svg"] = render_bars(snap["values"], snap["tags"])
    snap["explanation"] = explanation_panel(step["explanation"] if step else "")
    snap["pseudocode_line"] = step["pseudocode_line"] if step else -1
    return snap


def _json_body() -> dict:
    return request.get_json(silent=True) or {}


@app.errorhandler(SortVisualizerError)
def handle_visualizer_error(exc):
    logger.info("rejected request %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ctrl = get_controller()
    snap = ctrl.snapshot()
    selected = session.get("selected_algo", "bubble")
    info = get_algorithm(selected)
    actions = snap["actions"]
    stats = snap["stats"]

    html = render_template_string(INDEX_TEMPLATE,
        svg=render_bars(snap["values"], snap["tags"]),
        playback=playback_controls(actions, snap["speed_ms"]),
        generator=array_generator(len(snap["values"]) or CONFIG.default_size, CONFIG.max_size, actions),
        selector=algorithm_selector(list_algorithms(), selected),
        info=algorithm_info(info),
        stats=stats_panel(stats["comparisons"], stats["swaps"], stats["elapsed_ms"], snap["state"]),
        pseudocode=pseudocode_viewer(info.pseudocode if info else []),
        explanation=explanation_panel(),
        comparison=comparison_panel(),
        algorithms=list_algorithms(),
    )
    return html


# ---------------------------------------------------------------------------
# API: Array
# ---------------------------------------------------------------------------
@app.route("/api/generate", methods=["POST"])
def api_generate():
    data = _json_body()
    ctrl = get_controller()
    ctrl.generate(size=data.get("size"), seed=data.get("seed"))
    return jsonify(state_payload(ctrl))


@app.route("/api/custom", methods=["POST"])
def api_custom():
    data = _json_body()
    if "values" in data:
        values = data["values"]
        if not isinstance(values, list):
            raise InvalidValueError("values must be a list of integers")
    else:
        values = parse_values(data.get("text", ""))
    ctrl = get_controller()
    ctrl.set_custom_array(values, size=data.get("size"))
    return jsonify(state_payload(ctrl))


# ---------------------------------------------------------------------------
# API: Run control
# ---------------------------------------------------------------------------
@app.route("/api/start", methods=["POST"])
def api_start():
    data = _json_body()
    algo_key = data.get("algorithm") or session.get("selected_algo", "bubble")
    session["selected_algo"] = algo_key
    ctrl = get_controller()
    started = ctrl.start(algo_key, speed_ms=data.get("speed_ms"))
    payload = state_payload(ctrl)
    payload["started"] = started
    return jsonify(payload)


@app.route("/api/pause", methods=["POST"])
def api_pause():
    ctrl = get_controller()
    ctrl.toggle_pause()
    return jsonify(state_payload(ctrl))


@app.route("/api/step", methods=["POST"])
def api_step():
    ctrl = get_controller()
    ctrl.step()
    return jsonify(state_payload(ctrl))


@app.route("/api/stop", methods=["POST"])
def api_stop():
    ctrl = get_controller()
    stopping = ctrl.stop()
    if stopping:
        ctrl.wait()
    payload = state_payload(ctrl)
    payload["stopped"] = stopping
    return jsonify(payload)


@app.route("/api/speed", methods=["POST"])
def api_speed():
    data = _json_body()
    ctrl = get_controller()
    if "preset" in data:
        speed = ctrl.set_speed_preset(data["preset"])
    else:
        try:
            speed = ctrl.set_speed(float(data.get("speed_ms", CONFIG.default_speed_ms)))
        except (TypeError, ValueError):
            raise InvalidValueError("speed_ms must be a number")
    return jsonify({"speed_ms": speed})


@app.route("/api/state", methods=["GET"])
def api_state():
    return jsonify(state_payload(get_controller()))


# ---------------------------------------------------------------------------
# API: Algorithms & comparison
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify([
        {
            "key":         a.key,
            "label":       a.label,
            "complexity":  a.complexity_time,
            "space":       a.complexity_space,
            "stable":      a.stable,
            "tags":        a.tags,
            "description": a.description,
            "pseudocode":  a.pseudocode,
        }
        for a in list_algorithms()
    ])


@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    algo_key = _json_body().get("algo_key", "bubble")
    info = get_algorithm(algo_key)
    if info is None:
        return jsonify({"error": f"Unknown algorithm: {algo_key}"}), 400
    session["selected_algo"] = algo_key
    return jsonify({
        "info":       algorithm_info(info),
        "pseudocode": pseudocode_viewer(info.pseudocode),
    })


@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = _json_body()
    values = get_controller().snapshot()["values"]

    left, right = Recorder(CONFIG.max_size), Recorder(CONFIG.max_size)
    left.start(data.get("left", "bubble"), values)
    right.start(data.get("right", "quick"), values)
    left.run_to_completion()
    right.run_to_completion()

    result = compare(left, right)
    return jsonify({
        "left":       result.left.__dict__,
        "right":      result.right.__dict__,
        "winner_comparisons": result.winner_comparisons,
        "winner_swaps":       result.winner_swaps,
        "winner_steps":       result.winner_steps,
        "html":       comparison_panel(result),
    })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Algorithm Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-rose: #f43f5e;
    }
    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
    }
    #sidebar { width: 320px; padding: 16px; overflow-y: auto; border-right: 1px solid var(--border); }
    #main { flex: 1; display: flex; flex-direction: column; padding: 16px; gap: 12px; }
    .panel { background: var(--bg-panel); border: 1px solid var(--border); border-radius: 8px;
             padding: 12px; margin-bottom: 12px; }
    .panel h3 { font-size: 14px; margin-bottom: 8px; }
    button { background: var(--bg-panel); color: var(--text-primary); border: 1px solid var(--border);
             border-radius: 6px; padding: 6px 10px; cursor: pointer; }
    button:disabled { opacity: 0.4; cursor: not-allowed; }
    .btn-primary { background: var(--accent-cyan); border-color: var(--accent-cyan); }
    textarea, select, input { width: 100%; margin: 4px 0; background: var(--bg-darker);
                              color: var(--text-primary); border: 1px solid var(--border); }
    .code-line { font-family: monospace; font-size: 12px; white-space: pre; }
    .code-line.highlight { background: rgba(14, 165, 233, 0.25); }
    .placeholder, .explanation-text { color: var(--text-secondary); font-size: 13px; }
    #error { color: var(--accent-rose); min-height: 1em; }
  </style>
</head>
<body>
  <div id="sidebar">
    {{ generator|safe }}
    {{ selector|safe }}
    <div id="playback">{{ playback|safe }}</div>
    <div id="stats">{{ stats|safe }}</div>
    <div id="info">{{ info|safe }}</div>
    <div class="panel compare-controls">
      <select id="compare-right">
        {% for a in algorithms %}<option value="{{ a.key }}">{{ a.label }}</option>{% endfor %}
      </select>
      <button id="btn-compare">Compare with selected</button>
    </div>
    <div id="comparison">{{ comparison|safe }}</div>
  </div>
  <div id="main">
    <div id="canvas-svg">{{ svg|safe }}</div>
    <div id="error"></div>
    <div class="panel" id="explanation">{{ explanation|safe }}</div>
    <div class="panel" id="pseudocode">{{ pseudocode|safe }}</div>
  </div>
  <script>
    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      const body = await res.json();
      document.getElementById('error').textContent = body.error || '';
      return body;
    }

    function applyState(s) {
      if (!s || s.error && !s.values) return;
      document.getElementById('canvas-svg').innerHTML = s.svg;
      document.getElementById('explanation').innerHTML = s.explanation;
      document.getElementById('comparisons').textContent = s.stats.comparisons;
      document.getElementById('swaps').textContent = s.stats.swaps;
      document.getElementById('elapsed').textContent = Math.round(s.stats.elapsed_ms) + ' ms';
      document.getElementById('run-state').textContent = s.state.toUpperCase();
      document.querySelectorAll('.code-line').forEach(l =>
        l.classList.toggle('highlight', Number(l.dataset.line) === s.pseudocode_line));
      const can = new Set(s.actions);
      document.getElementById('btn-start').disabled = !can.has('start');
      document.getElementById('btn-pause').disabled = !(can.has('pause') || can.has('resume'));
      document.getElementById('btn-pause').textContent = can.has('resume') ? '▶ Resume' : '⏸ Pause';
      document.getElementById('btn-step').disabled = !can.has('step');
      document.getElementById('btn-stop').disabled = !can.has('stop');
    }

    async function poll() {
      const res = await fetch('/api/state');
      const s = await res.json();
      applyState(s);
      if (s.state === 'running' || s.state === 'paused') setTimeout(poll, 50);
    }

    const algo = () => document.getElementById('algo-selector').value;

    document.getElementById('btn-start').addEventListener('click', async () => {
      const speed = Number(document.getElementById('speed-slider').value);
      applyState(await post('/api/start', {algorithm: algo(), speed_ms: speed}));
      poll();
    });
    document.getElementById('btn-pause').addEventListener('click', async () => applyState(await post('/api/pause')));
    document.getElementById('btn-step').addEventListener('click', async () => applyState(await post('/api/step')));
    document.getElementById('btn-stop').addEventListener('click', async () => applyState(await post('/api/stop')));
    document.getElementById('btn-generate').addEventListener('click', async () => {
      const size = Number(document.getElementById('array-size').value);
      applyState(await post('/api/generate', {size}));
    });
    document.getElementById('btn-custom').addEventListener('click', async () => {
      const text = document.getElementById('custom-values').value;
      applyState(await post('/api/custom', {text}));
    });
    document.getElementById('array-size').addEventListener('input', async (e) => {
      document.getElementById('size-value').textContent = e.target.value;
      applyState(await post('/api/generate', {size: Number(e.target.value)}));
    });
    document.getElementById('speed-slider').addEventListener('input', async (e) => {
      document.getElementById('speed-value').textContent = e.target.value;
      await post('/api/speed', {speed_ms: Number(e.target.value)});
    });
    document.getElementById('speed-preset').addEventListener('change', async (e) => {
      const data = await post('/api/speed', {preset: e.target.value});
      document.getElementById('speed-slider').value = data.speed_ms;
      document.getElementById('speed-value').textContent = data.speed_ms;
    });
    document.getElementById('btn-compare').addEventListener('click', async () => {
      const right = document.getElementById('compare-right').value;
      const data = await post('/api/compare', {left: algo(), right});
      if (data.html) document.getElementById('comparison').innerHTML = data.html;
    });
    document.getElementById('algo-selector').addEventListener('change', async () => {
      const data = await post('/api/config/algo', {algo_key: algo()});
      if (data.info) document.getElementById('info').innerHTML = data.info;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if CONFIG.debug else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    logger.info("Sorting Visualizer — open http://%s:%d", CONFIG.host, CONFIG.port)
    app.run(debug=CONFIG.debug, host=CONFIG.host, port=CONFIG.port, threaded=True)
