"""Unit tests for OpenTelemetry setup helpers."""

import pytest
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import StatusCode
from pytest_mock import MockerFixture, MockType

from api_boilerplate.core.config import Settings
from api_boilerplate.core.observability import (
    LoguruSpanExporter,
    get_span_exporter,
    record_error_on_span,
    setup_tracing,
)


@pytest.mark.unit
class TestGetSpanExporter:
    """Exporter selection."""

    def test_console(self) -> None:
        assert isinstance(get_span_exporter(Settings()), LoguruSpanExporter)

    def test_otlp(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OBSERVABILITY_CONFIG__EXPORTER_TYPE", "otlp")

        assert isinstance(get_span_exporter(Settings()), OTLPSpanExporter)

    def test_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OBSERVABILITY_CONFIG__EXPORTER_TYPE", "none")

        assert get_span_exporter(Settings()) is None


@pytest.mark.unit
class TestSetupTracing:
    """Tracer provider installation."""

    def test_disabled_tracing_installs_nothing(
        self, mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OBSERVABILITY_CONFIG__ENABLE_TRACING", "false")
        mock_set = mocker.patch(
            "api_boilerplate.core.observability.trace.set_tracer_provider"
        )

        setup_tracing(Settings())

        mock_set.assert_not_called()

    def test_enabled_tracing_installs_provider(self, mocker: MockerFixture) -> None:
        mock_set = mocker.patch(
            "api_boilerplate.core.observability.trace.set_tracer_provider"
        )

        setup_tracing(Settings())

        provider = mock_set.call_args.args[0]
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "API Boilerplate"


@pytest.mark.unit
class TestRecordErrorOnSpan:
    """Span annotation for error responses."""

    @pytest.fixture
    def span(self, mocker: MockerFixture) -> MockType:
        span = mocker.Mock()
        span.is_recording.return_value = True
        mocker.patch(
            "api_boilerplate.core.observability.trace.get_current_span",
            return_value=span,
        )
        return span

    def test_operational_error_keeps_status(self, span: MockType) -> None:
        record_error_on_span(404, "User not found", operational=True)

        span.set_attribute.assert_any_call("error.status_code", 404)
        span.set_status.assert_not_called()

    def test_unexpected_error_marks_span(self, span: MockType) -> None:
        record_error_on_span(500, "Internal Server Error", operational=False)

        status = span.set_status.call_args.args[0]
        assert status.status_code == StatusCode.ERROR

    def test_non_recording_span_is_ignored(self, span: MockType) -> None:
        span.is_recording.return_value = False

        record_error_on_span(500, "Internal Server Error", operational=False)

        span.set_attribute.assert_not_called()
