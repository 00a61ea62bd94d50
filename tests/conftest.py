import random

import pytest

from sumten import create_app
from sumten.config import TestingConfig
from sumten.models.game import GameSettings
from sumten.services.broadcast_service import BroadcastCoordinator
from sumten.services.game_service import GameSession
from sumten.services.timer_service import SocketIOScheduler, TimerHandle

ADMIN_NAME = 'yiuyiu'


class RecordingSocketIO:
    """Stands in for the SocketIO server and records every emit."""

    def __init__(self):
        self.sent = []

    def emit(self, event, data=None, to=None):
        self.sent.append({'event': event, 'data': data, 'to': to})

    def events(self, name):
        return [msg for msg in self.sent if msg['event'] == name]

    def payloads(self, name):
        return [msg['data'] for msg in self.events(name)]

    def clear(self):
        self.sent = []


class FailingSocketIO(RecordingSocketIO):
    """Records emits like RecordingSocketIO but fails one chosen emit."""

    def __init__(self, event, skip=0):
        super().__init__()
        self.fail_event = event
        self.skip = skip
        self.tasks = []

    def start_background_task(self, target, *args):
        self.tasks.append((target, args))

    def sleep(self, seconds):
        pass

    def run_tasks(self):
        while self.tasks:
            target, args = self.tasks.pop(0)
            target(*args)

    def emit(self, event, data=None, to=None):
        if event == self.fail_event:
            if self.skip == 0:
                self.fail_event = None
                raise ConnectionError(f"transport closed while sending {event}")
            self.skip -= 1
        super().emit(event, data, to)


class ManualScheduler:
    """Timer scheduler whose ticks are fired explicitly by the test."""

    def __init__(self):
        self.handles = []

    def every(self, name, interval, callback):
        handle = TimerHandle(name, interval, callback)
        self.handles.append(handle)
        return handle

    def active(self):
        return [h for h in self.handles if h.active]

    def tick(self, count=1):
        for _ in range(count):
            for handle in self.active():
                handle.fire()


class TestConfig(TestingConfig):
    ADMIN_NAME = ADMIN_NAME
    DEFAULT_ROWS = 4
    DEFAULT_COLS = 5
    DEFAULT_DURATION = 10


@pytest.fixture()
def recorder():
    return RecordingSocketIO()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def session(recorder, scheduler):
    game = GameSession(
        BroadcastCoordinator(recorder),
        scheduler,
        settings=GameSettings(rows=3, cols=4, duration=5),
        admin_name=ADMIN_NAME,
        rng=random.Random(1234)
    )
    yield game
    game.shutdown()


@pytest.fixture()
def start_round(session, scheduler):
    """Ready every given player, request the start and run out the countdown."""
    def _start(*player_ids):
        for player_id in player_ids:
            session.toggle_ready(player_id)
        assert session.request_start(player_ids[0])['success']
        scheduler.tick(session.countdown_seconds)
    return _start


@pytest.fixture()
def app_scheduler():
    return ManualScheduler()


@pytest.fixture()
def flask_app(app_scheduler):
    application, socketio = create_app(TestConfig, scheduler=app_scheduler)
    yield application
    from sumten.services.game_service import get_game_service
    get_game_service().shutdown()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = flask_app.socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


@pytest.fixture()
def failing_session(scheduler):
    """Build a session whose transport fails once on a chosen event."""
    sessions = []

    def _make(event, skip=0, background=False):
        transport = FailingSocketIO(event, skip)
        game = GameSession(
            BroadcastCoordinator(transport),
            SocketIOScheduler(transport) if background else scheduler,
            settings=GameSettings(rows=3, cols=4, duration=5),
            admin_name=ADMIN_NAME,
            rng=random.Random(1234)
        )
        sessions.append(game)
        return game, transport

    yield _make
    for game in sessions:
        game.shutdown()
