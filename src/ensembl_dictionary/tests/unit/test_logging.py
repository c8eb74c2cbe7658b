import logging
from collections.abc import Generator

import pytest

from ensembl_dictionary import __version__
from ensembl_dictionary.platform.config import Settings
from ensembl_dictionary.platform.context import request_id_ctx
from ensembl_dictionary.platform.logging import (
    HANDLER_NAME,
    add_request_id,
    add_service_info,
    setup_logging,
)


@pytest.fixture
def root_logger() -> Generator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _ours(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if h.get_name() == HANDLER_NAME]


def test_setup_logging_is_idempotent(root_logger: logging.Logger) -> None:
    settings = Settings(log_format="console", log_level="debug")
    setup_logging(settings)
    setup_logging(settings)
    setup_logging(settings.model_copy(update={"log_format": "json"}))
    assert len(_ours(root_logger)) == 1
    assert root_logger.level == logging.DEBUG


def test_service_info_is_bound() -> None:
    event = add_service_info(None, "info", {"event": "x"})
    assert event["service"] == "ensembl-dictionary"
    assert event["version"] == __version__


def test_request_id_is_added_inside_a_request() -> None:
    assert "request_id" not in add_request_id(None, "info", {"event": "x"})
    token = request_id_ctx.set("req-1")
    try:
        assert add_request_id(None, "info", {"event": "x"})["request_id"] == "req-1"
    finally:
        request_id_ctx.reset(token)
