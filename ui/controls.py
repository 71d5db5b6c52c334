"""
controls.py — UI Control Panels
================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – start / pause / resume / step / stop / speed
  • array_generator     – size slider, random + custom array input
  • algorithm_selector  – dropdown over the registry
  • algorithm_info      – name, complexity, stability, description
  • stats_panel         – comparisons, swaps, elapsed time, run state
  • comparison_panel    – side-by-side metrics of two headless runs
  • pseudocode_viewer   – with live line highlighting
  • explanation_panel   – "why this step happened"

Buttons are enabled from RunController.available_actions(), which is how
the core tells the UI which requests would be rejected.
"""

from html import escape
from typing import Iterable, List, Optional

from algorithms import AlgoInfo
from config import SPEED_PRESETS
from engine import ComparisonResult


def _disabled(action: str, actions: Iterable[str]) -> str:
    return "" if action in actions else "disabled"


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(actions: Iterable[str] = (), speed_ms: float = 50) -> str:
    actions = set(actions)
    if "resume" in actions:
        pause_btn = f'<button id="btn-pause" title="Resume">▶ Resume</button>'
    else:
        pause_btn = f'<button id="btn-pause" title="Pause" {_disabled("pause", actions)}>⏸ Pause</button>'

    presets = "".join(
        f'<option value="{name}" {"selected" if ms == speed_ms else ""}>{name.capitalize()} ({ms} ms)</option>'
        for name, ms in SPEED_PRESETS.items()
    )

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-start" class="btn-primary" {_disabled("start", actions)}>▶ Sort</button>
        {pause_btn}
        <button id="btn-step" title="One step" {_disabled("step", actions)}>⏭</button>
        <button id="btn-stop" title="Stop" {_disabled("stop", actions)}>⏹</button>
      </div>
      <div class="speed-control">
        <label>Speed: <input type="range" id="speed-slider" min="0" max="500" value="{int(speed_ms)}">
               <span id="speed-value">{int(speed_ms)}</span> ms</label>
        <select id="speed-preset">{presets}</select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Array Generator
# ---------------------------------------------------------------------------
def array_generator(size: int = 50, max_size: int = 200, actions: Iterable[str] = ()) -> str:
    actions = set(actions)
    return f"""
    <div class="panel array-generator">
      <h3>📶 Array</h3>
      <label>Size: <input type="range" id="array-size" min="1" max="{max_size}" value="{size}">
             <span id="size-value">{size}</span></label>
      <button id="btn-generate" class="btn-secondary" {_disabled("generate", actions)}>New Random Array</button>
      <textarea id="custom-values" rows="3" placeholder="5, 3, 8, 1, 9, 2"></textarea>
      <button id="btn-custom" class="btn-secondary" {_disabled("custom", actions)}>Use Custom Array</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector / Info
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "bubble") -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" {sel}>{algo.label} — {algo.complexity_time}</option>'
        )
    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
    </div>
    """


def algorithm_info(info: Optional[AlgoInfo]) -> str:
    if info is None:
        return '<div class="panel algorithm-info"><p class="placeholder">Select an algorithm.</p></div>'
    return f"""
    <div class="panel algorithm-info">
      <h3 id="algorithm-name">{escape(info.label)}</h3>
      <table>
        <tr><td>Time:</td><td><strong id="complexity">{escape(info.complexity_time)}</strong></td></tr>
        <tr><td>Space:</td><td><strong>{escape(info.complexity_space)}</strong></td></tr>
        <tr><td>Stable:</td><td><strong>{"yes" if info.stable else "no"}</strong></td></tr>
      </table>
      <p id="algorithm-description">{escape(info.description)}</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Stats Panel
# ---------------------------------------------------------------------------
def stats_panel(comparisons: int = 0, swaps: int = 0, elapsed_ms: float = 0.0, state: str = "idle") -> str:
    return f"""
    <div class="panel stats-panel">
      <h3>📊 Stats</h3>
      <table>
        <tr><td>Comparisons:</td><td><strong id="comparisons">{comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong id="swaps">{swaps}</strong></td></tr>
        <tr><td>Time:</td><td><strong id="elapsed">{elapsed_ms:.0f} ms</strong></td></tr>
        <tr><td>State:</td><td><strong id="run-state" class="state-{state}">{state.upper()}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel">
          <h3>⚖️ Comparison Mode</h3>
          <p class="placeholder">Run two algorithms on the same array to compare.</p>
        </div>
        """

    left = comp.left
    right = comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {winner_label}"

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ Comparison: {left.algo_label} vs {right.algo_label}</h3>
      <table class="comparison-table">
        <thead>
          <tr><th>Metric</th><th>{left.algo_label}</th><th>{right.algo_label}</th><th>Winner</th></tr>
        </thead>
        <tbody>
          <tr><td>Comparisons</td><td>{left.comparisons}</td><td>{right.comparisons}</td>
              <td>{winner_badge(comp.winner_comparisons)}</td></tr>
          <tr><td>Swaps</td><td>{left.swaps}</td><td>{right.swaps}</td>
              <td>{winner_badge(comp.winner_swaps)}</td></tr>
          <tr><td>Steps</td><td>{left.total_steps}</td><td>{right.total_steps}</td>
              <td>{winner_badge(comp.winner_steps)}</td></tr>
        </tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "") -> str:
    if not explanation:
        return '<div class="explanation-text">▶ Press <strong>Sort</strong> to watch the algorithm step by step.</div>'
    return f'<div class="explanation-text">{escape(explanation)}</div>'
