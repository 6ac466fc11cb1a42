from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from portfolio_generator.models import (
    Failed,
    FailureKind,
    FileSelected,
    Idle,
    Phase,
    PortfolioDocument,
    ResumeFile,
    Submitting,
    Succeeded,
    UploadState,
)
from portfolio_generator.services import (
    NO_FILE_MESSAGE,
    GenerationClient,
    RequestStateMachine,
    ServerError,
    TransportError,
)
from tests.fakes import FakeClient


def _other_file() -> ResumeFile:
    return ResumeFile(filename="other.docx", content=b"PK other")


def test_initial_state_is_idle() -> None:
    machine = RequestStateMachine()

    assert isinstance(machine.state.request, Idle)
    assert machine.state.phase is Phase.IDLE
    assert machine.state.selected_file is None
    assert machine.state.document is None
    assert machine.state.error_message is None
    assert machine.state.active_theme == "modern"


def test_unknown_initial_theme_is_rejected() -> None:
    with pytest.raises(ValueError):
        RequestStateMachine(theme="neon")


def test_select_file_moves_to_file_selected(resume_file: ResumeFile) -> None:
    machine = RequestStateMachine()
    machine.select_file(resume_file)

    assert isinstance(machine.state.request, FileSelected)
    assert machine.state.selected_file is resume_file


class TestSubmitValidation:
    def test_submit_without_file_never_calls_network(self) -> None:
        machine = RequestStateMachine()
        client = FakeClient()

        pending = machine.submit()

        assert pending is None
        assert client.calls == []
        assert machine.state.error_message == NO_FILE_MESSAGE
        assert machine.state.request == Failed(NO_FILE_MESSAGE, FailureKind.VALIDATION)
        assert machine.state.last_request_id == 0

    def test_validation_does_not_enter_submitting(self) -> None:
        machine = RequestStateMachine()
        machine.submit()

        assert not machine.state.is_submitting
        assert machine.state.selected_file is None


class TestSubmit:
    def test_submit_returns_pending_request(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        machine.select_file(resume_file)

        pending = machine.submit()

        assert pending is not None
        assert pending.request_id == 1
        assert pending.file is resume_file
        assert machine.state.request == Submitting(1)
        assert machine.state.phase is Phase.SUBMITTING

    def test_submit_clears_previous_result(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        machine.select_file(resume_file)
        machine.perform(machine.submit(), FakeClient())
        assert machine.state.document is not None

        machine.submit()

        assert machine.state.document is None
        assert machine.state.error_message is None
        assert machine.state.is_submitting

    def test_repeated_submit_while_submitting_is_noop(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        client = FakeClient()
        machine.select_file(resume_file)

        first = machine.submit()
        second = machine.submit()
        third = machine.submit()

        assert first is not None
        assert second is None
        assert third is None
        assert machine.state.last_request_id == 1

        machine.perform(first, client)
        assert len(client.calls) == 1


class TestCompletion:
    def test_success_carries_document(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        document = PortfolioDocument(name="Ada Lovelace", title="Engineer")
        machine.select_file(resume_file)

        applied = machine.perform(machine.submit(), FakeClient(document=document))

        assert applied is True
        assert machine.state.request == Succeeded(1, document)
        assert machine.state.document is document
        assert machine.state.selected_file is resume_file

    def test_server_error_message_contains_body(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        machine.select_file(resume_file)

        machine.perform(machine.submit(), FakeClient(error=ServerError(400, "invalid file type")))

        state = machine.state
        assert state.phase is Phase.FAILED
        assert isinstance(state.request, Failed)
        assert state.request.kind is FailureKind.SERVER
        assert "invalid file type" in state.error_message
        assert state.error_message.startswith("Error: ")

    def test_transport_error_message_describes_cause(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        machine.select_file(resume_file)

        error = TransportError("Connection refused")
        machine.perform(machine.submit(), FakeClient(error=error))

        assert machine.state.request.kind is FailureKind.TRANSPORT
        assert machine.state.error_message == "Error: Connection refused"

    def test_stale_response_is_discarded(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        machine.select_file(resume_file)
        first = machine.submit()
        machine.fail(first.request_id, TransportError("timed out"))

        second = machine.submit()
        newer = PortfolioDocument(name="Newer", title="Result")
        assert machine.complete(second.request_id, newer) is True

        older = PortfolioDocument(name="Older", title="Result")
        assert machine.complete(first.request_id, older) is False
        assert machine.fail(first.request_id, TransportError("late")) is False
        assert machine.state.document is newer

    def test_response_after_new_selection_still_lands(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        machine.select_file(resume_file)
        pending = machine.submit()

        machine.select_file(_other_file())
        assert isinstance(machine.state.request, FileSelected)

        document = PortfolioDocument(name="A", title="B")
        assert machine.complete(pending.request_id, document) is True
        assert machine.state.document is document
        assert machine.state.selected_file.filename == "other.docx"


class TestSelectFileClearsResults:
    def test_select_after_success_clears_portfolio(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        machine.select_file(resume_file)
        machine.perform(machine.submit(), FakeClient())

        machine.select_file(_other_file())

        assert machine.state.document is None
        assert machine.state.error_message is None
        assert isinstance(machine.state.request, FileSelected)

    def test_select_after_failure_clears_error(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        machine.submit()
        assert machine.state.error_message == NO_FILE_MESSAGE

        machine.select_file(resume_file)

        assert machine.state.error_message is None
        assert machine.state.document is None

    def test_retry_after_failure_clears_error(self, resume_file: ResumeFile) -> None:
        machine = RequestStateMachine()
        machine.select_file(resume_file)
        machine.perform(machine.submit(), FakeClient(error=ServerError(500, "boom")))

        pending = machine.submit()

        assert pending is not None
        assert pending.request_id == 2
        assert machine.state.error_message is None


class TestChangeTheme:
    @pytest.mark.parametrize("finish", [False, True])
    def test_theme_change_leaves_request_untouched(
        self, resume_file: ResumeFile, finish: bool
    ) -> None:
        machine = RequestStateMachine()
        machine.select_file(resume_file)
        pending = machine.submit()
        if finish:
            machine.perform(pending, FakeClient())

        before = (
            machine.state.selected_file,
            machine.state.phase,
            machine.state.request,
            machine.state.last_request_id,
        )
        machine.change_theme("colorful")
        after = (
            machine.state.selected_file,
            machine.state.phase,
            machine.state.request,
            machine.state.last_request_id,
        )

        assert machine.state.active_theme == "colorful"
        assert before == after

    def test_unknown_theme_is_rejected(self) -> None:
        machine = RequestStateMachine()
        with pytest.raises(ValueError):
            machine.change_theme("neon")
        assert machine.state.active_theme == "modern"


def test_listeners_see_every_transition(resume_file: ResumeFile) -> None:
    machine = RequestStateMachine()
    seen: list[Phase] = []
    machine.subscribe(lambda state: seen.append(state.phase))

    machine.select_file(resume_file)
    machine.perform(machine.submit(), FakeClient())
    machine.change_theme("minimal")

    assert seen == [Phase.FILE_SELECTED, Phase.SUBMITTING, Phase.SUCCEEDED, Phase.SUCCEEDED]


def test_upload_state_defaults() -> None:
    state = UploadState(active_theme="minimal")
    assert state.phase is Phase.IDLE
    assert state.last_request_id == 0
    assert not state.is_submitting


def test_unsendable_request_leaves_machine_usable(resume_file: ResumeFile) -> None:
    session = MagicMock()
    session.post.side_effect = ValueError("Invalid value NaN (not a number)")
    client = GenerationClient(
        "http://localhost:8080/generate", timeout=float("nan"), session=session
    )
    machine = RequestStateMachine()
    machine.select_file(resume_file)

    assert machine.perform(machine.submit(), client) is True

    assert machine.state.phase is Phase.FAILED
    assert machine.state.request.kind is FailureKind.TRANSPORT
    assert machine.submit() is not None
