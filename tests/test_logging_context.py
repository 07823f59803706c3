import logging
from webhook_authorizer.core.logging import with_context


def test_with_context_prefixes_message(caplog):
    logger = logging.getLogger("testlogger")
    caplog.set_level(logging.INFO)

    log = with_context(logger, method="POST", stage="dev")
    log.info("Hello")

    records = [r.message for r in caplog.records]
    assert any("[method=POST stage=dev] Hello" in msg for msg in records)


def test_with_context_merges_extra(caplog):
    logger = logging.getLogger("testlogger")
    caplog.set_level(logging.INFO)

    log = with_context(logger, stage="prod")
    log.info("Hi", extra={"reason": "missing_signature"})

    records = [r.message for r in caplog.records]
    assert any("[stage=prod reason=missing_signature] Hi" in msg for msg in records)


def test_with_context_skips_none_values(caplog):
    logger = logging.getLogger("testlogger")
    caplog.set_level(logging.INFO)

    with_context(logger, stage=None).info("Bare")

    assert "Bare" in [r.message for r in caplog.records]
