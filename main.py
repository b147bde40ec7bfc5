"""
main.py — Graph Builder Flask App
==================================
JSON API in front of the graph store and the algorithm runner.  The
canvas / toolbar front end is a separate client of these routes.

Routes:
  GET    /api/graph               – snapshot + highlight sets
  POST   /api/nodes               – create node            {x?, y?}
  PATCH  /api/nodes/<id>          – rename / move          {label?, x?, y?}
  DELETE /api/nodes/<id>          – delete node and its edges
  POST   /api/edges               – connect two nodes      {source, target, sourceHandle?, targetHandle?}
  PATCH  /api/edges/<id>          – reweight               {weight}
  DELETE /api/edges/<id>          – delete edge
  POST   /api/mode/toggle         – directed ⇄ undirected
  POST   /api/graph/clear         – empty the graph
  GET    /api/graph/export        – snapshot as a download
  POST   /api/graph/import        – replace graph from a snapshot
  GET    /api/algorithms          – algorithm registry
  POST   /api/run                 – run an algorithm       {algorithm?, start, end?}
  POST   /api/stop                – stop playback, clear highlights
  GET    /api/state               – playback state for polling
  POST   /api/config/algo         – select algorithm
  POST   /api/config/speed        – choose playback speed preset

State management:
  One GraphStore per server process, held in app.extensions together with
  the runner and the snapshot file.  Every successful mutating request
  re-saves the snapshot; it is restored when the app is created.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from flask import Flask, Response, current_app, jsonify, request

from algorithms import get_algorithm, list_algorithms
from config import ENV_PREFIX, Config
from engine import SPEED_PRESETS, AlgorithmRunner, RunRequestError, Scheduler, TimerScheduler
from graph import GraphStore, SnapshotError, SnapshotFile, dump_snapshot, dumps_snapshot, loads_snapshot

logger = logging.getLogger(__name__)

EXTENSION_KEY = "graph_builder"

# endpoints whose success changes the persisted graph
PERSISTED_ENDPOINTS = {
    "create_node", "update_node", "delete_node",
    "create_edge", "update_edge", "delete_edge",
    "toggle_mode", "clear_graph", "import_graph",
}


@dataclass
class Workspace:
    store:         GraphStore
    runner:        AlgorithmRunner
    snapshot_file: Optional[SnapshotFile] = None
    selected_algo: str                    = "bfs"
    speed:         str                    = "medium"


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(overrides: Optional[Dict[str, Any]] = None, scheduler: Optional[Scheduler] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    app.config.from_prefixed_env(ENV_PREFIX)
    if overrides:
        app.config.update(overrides)

    store = GraphStore()
    runner = AlgorithmRunner(store, scheduler or TimerScheduler(), delay=app.config["STEP_DELAY"])

    snapshot_file = None
    if app.config.get("SNAPSHOT_PATH"):
        snapshot_file = SnapshotFile(app.config["SNAPSHOT_PATH"])
        snapshot_file.restore(store)

    app.extensions[EXTENSION_KEY] = Workspace(
        store=store,
        runner=runner,
        snapshot_file=snapshot_file,
        speed=app.config["DEFAULT_SPEED"],
    )

    register_routes(app)
    return app


# ---------------------------------------------------------------------------
# State helpers
# ---------------------------------------------------------------------------
def get_workspace() -> Workspace:
    return current_app.extensions[EXTENSION_KEY]


def get_store() -> GraphStore:
    return get_workspace().store


def get_runner() -> AlgorithmRunner:
    return get_workspace().runner


def highlights_payload(store: GraphStore) -> Dict[str, Any]:
    return {
        "highlightedNodes": sorted(store.highlighted_nodes),
        "highlightedEdges": sorted(store.highlighted_edges),
    }


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def register_routes(app: Flask) -> None:

    @app.after_request
    def persist_snapshot(response):
        ws = app.extensions[EXTENSION_KEY]
        if (
            ws.snapshot_file is not None
            and request.endpoint in PERSISTED_ENDPOINTS
            and response.status_code < 400
        ):
            ws.snapshot_file.save(ws.store)
        return response

    # -- graph ---------------------------------------------------------
    @app.route("/api/graph", methods=["GET"])
    def get_graph():
        store = get_store()
        payload = dump_snapshot(store)
        payload.update(highlights_payload(store))
        return jsonify(payload)

    @app.route("/api/graph/clear", methods=["POST"])
    def clear_graph():
        get_runner().reset()
        get_store().clear()
        return jsonify(dump_snapshot(get_store()))

    @app.route("/api/graph/export", methods=["GET"])
    def export_graph():
        filename = f"graph-{date.today().isoformat()}.json"
        return Response(
            dumps_snapshot(get_store()),
            mimetype="application/json",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/graph/import", methods=["POST"])
    def import_graph():
        store = get_store()
        try:
            loads_snapshot(store, request.get_data(as_text=True))
        except SnapshotError as e:
            logger.info("Rejected import: %s", e)
            return _error(f"Invalid graph file: {e}")
        get_runner().reset()
        return jsonify(dump_snapshot(store))

    # -- nodes ---------------------------------------------------------
    @app.route("/api/nodes", methods=["POST"])
    def create_node():
        data = _json_body()
        position = None
        if "x" in data or "y" in data:
            if not (_is_number(data.get("x")) and _is_number(data.get("y"))):
                return _error("Node position needs numeric x and y")
            position = (data["x"], data["y"])
        node = get_store().add_node(position)
        return jsonify({"node": node.to_dict()}), 201

    @app.route("/api/nodes/<node_id>", methods=["PATCH"])
    def update_node(node_id):
        store = get_store()
        node = store.get_node(node_id)
        if node is None:
            return _error("Unknown node", 404)

        data = _json_body()
        if "label" in data and not isinstance(data["label"], str):
            return _error("Label must be a string")
        moving = "x" in data or "y" in data
        x, y = data.get("x", node.x), data.get("y", node.y)
        if moving and not (_is_number(x) and _is_number(y)):
            return _error("Node position needs numeric x and y")

        if "label" in data:
            store.rename_node(node_id, data["label"])
        if moving:
            store.move_node(node_id, x, y)
        return jsonify({"node": node.to_dict()})

    @app.route("/api/nodes/<node_id>", methods=["DELETE"])
    def delete_node(node_id):
        if not get_store().delete_node(node_id):
            return _error("Unknown node", 404)
        return jsonify({"deleted": node_id})

    # -- edges ---------------------------------------------------------
    @app.route("/api/edges", methods=["POST"])
    def create_edge():
        data = _json_body()
        edge = get_store().add_edge(
            data.get("source"),
            data.get("target"),
            source_handle=_optional_str(data.get("sourceHandle")),
            target_handle=_optional_str(data.get("targetHandle")),
        )
        # a declined connection is not an error, the UI just draws nothing
        if edge is None:
            return jsonify({"edge": None})
        return jsonify({"edge": edge.to_dict()}), 201

    @app.route("/api/edges/<edge_id>", methods=["PATCH"])
    def update_edge(edge_id):
        store = get_store()
        weight = _json_body().get("weight")
        if store.get_edge(edge_id) is None:
            return _error("Unknown edge", 404)
        if not _is_number(weight):
            return _error("Weight must be a number")
        store.set_edge_weight(edge_id, weight)
        return jsonify({"edge": store.get_edge(edge_id).to_dict()})

    @app.route("/api/edges/<edge_id>", methods=["DELETE"])
    def delete_edge(edge_id):
        if not get_store().delete_edge(edge_id):
            return _error("Unknown edge", 404)
        return jsonify({"deleted": edge_id})

    # -- mode ----------------------------------------------------------
    @app.route("/api/mode/toggle", methods=["POST"])
    def toggle_mode():
        get_runner().reset()
        mode = get_store().toggle_mode()
        return jsonify({"graphMode": mode.value})

    # -- algorithms ----------------------------------------------------
    @app.route("/api/algorithms", methods=["GET"])
    def algorithms():
        return jsonify({
            "algorithms": [a.to_dict() for a in list_algorithms()],
            "selected":   get_workspace().selected_algo,
        })

    @app.route("/api/run", methods=["POST"])
    def run():
        ws = get_workspace()
        data = _json_body()
        algo_key = data.get("algorithm") or ws.selected_algo
        try:
            result = ws.runner.run(algo_key, data.get("start"), data.get("end"))
        except RunRequestError as e:
            return _error(str(e))
        ws.selected_algo = algo_key
        return jsonify({"result": result.to_dict(), "state": ws.runner.state.value})

    @app.route("/api/stop", methods=["POST"])
    def stop():
        get_runner().stop()
        return jsonify({"state": get_runner().state.value})

    @app.route("/api/state", methods=["GET"])
    def state():
        ws = get_workspace()
        run = ws.runner.playback.current_run
        payload = {
            "state":         ws.runner.state.value,
            "selectedAlgo":  ws.selected_algo,
            "speed":         ws.speed,
            "currentStep":   run.fired if run else 0,
            "totalSteps":    run.total if run else 0,
            "result":        ws.runner.last_result.to_dict() if ws.runner.last_result else None,
        }
        payload.update(highlights_payload(ws.store))
        return jsonify(payload)

    # -- config --------------------------------------------------------
    @app.route("/api/config/algo", methods=["POST"])
    def config_algo():
        algo_key = _json_body().get("algo_key", "bfs")
        if get_algorithm(algo_key) is None:
            return _error(f"Unknown algorithm: {algo_key}")
        ws = get_workspace()
        ws.selected_algo = algo_key
        ws.runner.reset()
        return jsonify({"selected": algo_key})

    @app.route("/api/config/speed", methods=["POST"])
    def config_speed():
        speed = _json_body().get("speed", "medium")
        if not isinstance(speed, str) or speed not in SPEED_PRESETS:
            return _error(f"Unknown speed: {speed}")
        ws = get_workspace()
        ws.speed = speed
        delay = ws.runner.playback.set_speed(speed)
        return jsonify({"speed": speed, "delay": delay})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    logging.getLogger().setLevel(app.config["LOG_LEVEL"])
    logger.info("Graph Builder API on http://%s:%s", app.config["HOST"], app.config["PORT"])
    app.run(debug=app.config["DEBUG"], host=app.config["HOST"], port=app.config["PORT"])
