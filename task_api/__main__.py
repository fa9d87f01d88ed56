"""Allows `python -m task_api` to start the server."""

from task_api.main import run

run()
