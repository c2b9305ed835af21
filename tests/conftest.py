"""Shared pytest fixtures for resource-hog tests.

This module provides common fixtures for testing the resource-hog application.
Most tests run the controller against FakeProcess so no real worker burns CPU;
tests that need a real worker process build their own controller.
"""

import itertools
import threading
import time

import pytest
from prometheus_client import REGISTRY

from resource_hog.app import create_app
from resource_hog.services.hog_controller import HogController

_pids = itertools.count(90_000)


class FakeProcess:
    """Stand-in for multiprocessing.Process that never runs its target.

    Tests drive its lifecycle with exit(code); join() blocks until then, like
    a real process.
    """

    def __init__(self, target=None, args=(), name=None, daemon=None):
        self.target = target
        self.args = args
        self.name = name
        self.daemon = daemon
        self.pid = None
        self.exitcode = None
        self.started = False
        self.terminated = False
        self._exited = threading.Event()

    def start(self):
        self.started = True
        self.pid = next(_pids)

    def is_alive(self):
        return self.started and not self._exited.is_set()

    def terminate(self):
        self.terminated = True
        self.exit(-15)

    def join(self, timeout=None):
        self._exited.wait(timeout)

    def exit(self, code=0):
        if not self._exited.is_set():
            self.exitcode = code
            self._exited.set()

    @property
    def config(self):
        return self.args[0]

    @property
    def stop_event(self):
        return self.args[1]


class FailingProcess(FakeProcess):
    """Process whose start() fails like fork() under memory pressure."""

    def start(self):
        raise OSError("Cannot allocate memory")


def wait_until(predicate, timeout=5.0, interval=0.01):
    """Poll predicate until it is true or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


def _clear_prometheus_registry():
    """Clear all Prometheus collectors to avoid duplicates between tests.

    Prometheus uses a global registry, so collectors registered in one test
    persist to the next.
    """
    collectors = list(REGISTRY._collector_to_names.keys())
    for collector in collectors:
        try:
            REGISTRY.unregister(collector)
        except ValueError:
            # Collector was already unregistered
            pass


@pytest.fixture(autouse=True)
def clean_prometheus():
    """Automatically clean Prometheus registry before and after each test."""
    _clear_prometheus_registry()
    yield
    _clear_prometheus_registry()


@pytest.fixture
def processes():
    """Every FakeProcess created by the fake_controller, in creation order."""
    return []


@pytest.fixture
def fake_controller(processes):
    """HogController wired to FakeProcess and threading.Event."""

    def factory(**kwargs):
        process = FakeProcess(**kwargs)
        processes.append(process)
        return process

    controller = HogController(
        grace_period_seconds=0.05,
        process_factory=factory,
        event_factory=threading.Event,
    )
    yield controller
    controller.shutdown()


@pytest.fixture
def app(fake_controller):
    """Create Flask application for testing with auth disabled.

    Debug mode enabled to simulate development environment (disables HSTS).
    """
    test_app = create_app({"API_KEY": None, "HOG_CONTROLLER": fake_controller})
    test_app.config["TESTING"] = True
    test_app.debug = True
    return test_app


@pytest.fixture
def client(app):
    """Create test client with auth disabled."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def app_with_auth(fake_controller):
    """Create Flask application with authentication enabled.

    The expected API key is 'test-api-key-12345'.
    """
    test_app = create_app({"API_KEY": "test-api-key-12345", "HOG_CONTROLLER": fake_controller})
    test_app.config["TESTING"] = True
    test_app.debug = True
    return test_app


@pytest.fixture
def client_with_auth(app_with_auth):
    """Create test client with authentication enabled."""
    with app_with_auth.test_client() as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Return headers with valid API key for authenticated requests."""
    return {"X-API-Key": "test-api-key-12345"}


@pytest.fixture
def app_production(fake_controller):
    """Create Flask application configured for production mode (HSTS on)."""
    test_app = create_app({"API_KEY": None, "HOG_CONTROLLER": fake_controller})
    test_app.config["TESTING"] = True
    test_app.debug = False
    return test_app


@pytest.fixture
def client_production(app_production):
    """Create test client in production mode."""
    with app_production.test_client() as test_client:
        yield test_client
