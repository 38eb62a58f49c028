# src/task_tracker/connectors/web_connector.py

"""
Web connector (Flask).

Two surfaces over the same AppState:
- an HTML page driven by the task manager view (form posts + redirect),
- a JSON API over the task store.

All view access happens under state.lock.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..core.manager import format_date
from ..core.state import AppState
from ..tasks.task_models import TaskStatus

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _back_to_index(state: AppState):
    term = state.view.search_term
    return redirect(url_for("index", q=term) if term else url_for("index"))


def _form_status(default: TaskStatus = TaskStatus.PENDING) -> TaskStatus:
    raw = request.form.get("status")
    if raw is None or raw == "":
        return default
    return TaskStatus.parse(raw)


def create_app(state: AppState) -> Flask:
    app = Flask(__name__, template_folder=str(TEMPLATE_DIR))
    app.config["SECRET_KEY"] = getattr(state.settings, "secret_key", "task-tracker-dev")
    app.jinja_env.filters["format_date"] = format_date

    view = state.view

    # ── Page routes ───────────────────────────────────────────

    @app.route("/")
    def index():
        """Render the task manager page."""
        with state.lock:
            if "q" in request.args:
                view.set_search(request.args.get("q", ""))
            if view.loading:
                result = view.load()
                if not result.ok:
                    flash(result.message, "error")
            title, hint = view.empty_message()
            return render_template(
                "index.html",
                app_name=getattr(state.settings, "app_name", "task-tracker"),
                view=view,
                items=view.items(),
                statuses=list(TaskStatus),
                empty_title=title,
                empty_hint=hint,
            )

    @app.route("/dialogs/add", methods=["GET"])
    def open_add():
        with state.lock:
            view.open_add_dialog()
            return _back_to_index(state)

    @app.route("/dialogs/close", methods=["POST"])
    def close_dialogs():
        with state.lock:
            view.close_add_dialog()
            view.close_edit_dialog()
            view.close_delete_dialog()
            return _back_to_index(state)

    @app.route("/tasks", methods=["POST"])
    def add_task():
        with state.lock:
            try:
                status = _form_status()
            except ValueError as e:
                flash(str(e), "error")
                return _back_to_index(state)
            result = view.add_task(request.form.get("title", ""), status)
            if not result.ok:
                flash(result.message, "error")
            return _back_to_index(state)

    @app.route("/tasks/<int:task_id>/edit", methods=["GET"])
    def open_edit(task_id: int):
        with state.lock:
            task = view.cache.find(task_id)
            if task is None:
                flash(f"Task {task_id} not found.", "error")
            else:
                view.open_edit_dialog(task)
            return _back_to_index(state)

    @app.route("/tasks/<int:task_id>/edit", methods=["POST"])
    def submit_edit(task_id: int):
        with state.lock:
            if view.editing_task is None or view.editing_task.id != task_id:
                task = view.cache.find(task_id)
                if task is None:
                    flash(f"Task {task_id} not found.", "error")
                    return _back_to_index(state)
                view.open_edit_dialog(task)
            try:
                status = _form_status(view.edit_status)
            except ValueError as e:
                flash(str(e), "error")
                return _back_to_index(state)
            result = view.submit_edit(request.form.get("title", ""), status)
            if not result.ok:
                flash(result.message, "error")
            return _back_to_index(state)

    @app.route("/tasks/<int:task_id>/toggle", methods=["POST"])
    def toggle(task_id: int):
        with state.lock:
            task = view.cache.find(task_id)
            if task is None:
                flash(f"Task {task_id} not found.", "error")
                return _back_to_index(state)
            result = view.toggle_status(task)
            if not result.ok:
                flash(result.message, "error")
            return _back_to_index(state)

    @app.route("/tasks/<int:task_id>/delete", methods=["POST"])
    def request_delete(task_id: int):
        with state.lock:
            task = view.cache.find(task_id)
            if task is None:
                flash(f"Task {task_id} not found.", "error")
                return _back_to_index(state)
            view.item(task).request_delete(view)
            return _back_to_index(state)

    @app.route("/delete/confirm", methods=["POST"])
    def confirm_delete():
        with state.lock:
            result = view.confirm_delete()
            if not result.ok:
                flash(result.message, "error")
            return _back_to_index(state)

    # ── Task API ──────────────────────────────────────────────

    store = state.task_store

    def _json_body():
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else None

    @app.route("/api/tasks", methods=["GET"])
    def api_list_tasks():
        """List all tasks, newest first."""
        try:
            tasks = [t.to_dict() for t in store.list_tasks()]
            return jsonify({"status": "success", "tasks": tasks, "count": len(tasks)})
        except Exception as e:
            logger.exception("Failed to list tasks")
            return jsonify({"status": "error", "error": str(e)}), 500

    @app.route("/api/tasks", methods=["POST"])
    def api_create_task():
        """
        Create a task.

        Body (JSON):
            title (str, required)
            status (str, optional): "pending" (default) or "complete".
        """
        data = _json_body()
        if data is None:
            return jsonify({"status": "error", "error": "Request body must be JSON"}), 400

        title = str(data.get("title") or "").strip()
        if not title:
            return jsonify({"status": "error", "error": "title is required"}), 400
        try:
            status = TaskStatus.parse(data.get("status") or TaskStatus.PENDING)
        except ValueError as e:
            return jsonify({"status": "error", "error": str(e)}), 400

        try:
            task = store.add_task(title, status)
        except Exception as e:
            logger.exception("Failed to create task")
            return jsonify({"status": "error", "error": str(e)}), 500
        return jsonify({"status": "success", "task": task.to_dict()}), 201

    @app.route("/api/tasks/<int:task_id>", methods=["GET"])
    def api_get_task(task_id: int):
        try:
            task = store.get_task(task_id)
        except Exception as e:
            logger.exception("Failed to read task %s", task_id)
            return jsonify({"status": "error", "error": str(e)}), 500
        if task is None:
            return jsonify({"status": "error", "error": "Task not found"}), 404
        return jsonify({"status": "success", "task": task.to_dict()})

    @app.route("/api/tasks/<int:task_id>", methods=["PUT"])
    def api_update_task(task_id: int):
        """
        Update title (and status when given).

        Body (JSON):
            title (str, required)
            status (str, optional): omitted -> status unchanged.
        """
        data = _json_body()
        if data is None:
            return jsonify({"status": "error", "error": "Request body must be JSON"}), 400

        title = str(data.get("title") or "").strip()
        if not title:
            return jsonify({"status": "error", "error": "title is required"}), 400
        status = None
        if data.get("status") is not None:
            try:
                status = TaskStatus.parse(data["status"])
            except ValueError as e:
                return jsonify({"status": "error", "error": str(e)}), 400

        try:
            task = store.update_task(task_id, title, status)
        except Exception as e:
            logger.exception("Failed to update task %s", task_id)
            return jsonify({"status": "error", "error": str(e)}), 500
        return jsonify({"status": "success", "task": task.to_dict() if task else None})

    @app.route("/api/tasks/<int:task_id>/status", methods=["PATCH"])
    def api_update_status(task_id: int):
        data = _json_body()
        if data is None:
            return jsonify({"status": "error", "error": "Request body must be JSON"}), 400
        try:
            status = TaskStatus.parse(data.get("status") or "")
        except ValueError as e:
            return jsonify({"status": "error", "error": str(e)}), 400

        try:
            task = store.update_task_status(task_id, status)
        except Exception as e:
            logger.exception("Failed to update status of task %s", task_id)
            return jsonify({"status": "error", "error": str(e)}), 500
        return jsonify({"status": "success", "task": task.to_dict() if task else None})

    @app.route("/api/tasks/<int:task_id>", methods=["DELETE"])
    def api_delete_task(task_id: int):
        try:
            task = store.delete_task(task_id)
        except Exception as e:
            logger.exception("Failed to delete task %s", task_id)
            return jsonify({"status": "error", "error": str(e)}), 500
        return jsonify({"status": "success", "task": task.to_dict() if task else None})

    return app


def run_web_server(state: AppState) -> None:
    settings = state.settings
    host = getattr(settings, "web_host", "127.0.0.1")
    port = int(getattr(settings, "web_port", 5000))
    app = create_app(state)
    logger.info("Web connector listening on http://%s:%s", host, port)
    app.run(host=host, port=port, threaded=True, use_reloader=False)
