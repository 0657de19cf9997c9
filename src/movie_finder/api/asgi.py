"""ASGI entrypoint for the movie finder API."""

from movie_finder.api.app import create_app
from movie_finder.containers import build_container

app = create_app(build_container())
