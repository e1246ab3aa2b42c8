import logging

from reviewfeed.errors import DecodeError, FetchTransportError, InfrastructureError, ReviewFeedError
from reviewfeed.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from reviewfeed.events.bus import EventBus


def test_hierarchy():
    assert issubclass(FetchTransportError, InfrastructureError)
    assert issubclass(DecodeError, ReviewFeedError)


def test_handle_logs_at_severity(caplog):
    handler = ErrorHandler(logging.getLogger("reviewfeed.tests"))

    with caplog.at_level(logging.WARNING, logger="reviewfeed.tests"):
        handler.handle(FetchTransportError("offline"), ErrorSeverity.WARNING, {"offset": 20})

    record = caplog.records[0]
    assert record.levelno == logging.WARNING
    assert "FetchTransportError: offline" in record.getMessage()
    assert record.context == {"offset": 20}


def test_handle_publishes_event():
    bus = EventBus()
    events = []
    bus.subscribe(ErrorOccurredEvent, events.append)
    handler = ErrorHandler(logging.getLogger("reviewfeed.tests"), bus)

    error = DecodeError("bad page")
    handler.handle(error, ErrorSeverity.WARNING)

    assert events[0].error is error
    assert events[0].severity is ErrorSeverity.WARNING
    assert events[0].context == {}


def test_ui_callback_only_for_serious_errors():
    handler = ErrorHandler(logging.getLogger("reviewfeed.tests"))
    shown = []
    handler.register_ui_callback(lambda message, severity: shown.append((message, severity)))

    handler.handle(FetchTransportError("minor"), ErrorSeverity.WARNING)
    handler.handle(FetchTransportError("major"), ErrorSeverity.ERROR)

    assert shown == [("major", ErrorSeverity.ERROR)]
