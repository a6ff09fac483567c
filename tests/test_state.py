"""Tests for the phase state machine."""

from glide_snake.state import Phase, PhaseEvent, next_phase, start_event


class TestNextPhase:
    def test_defined_transitions(self):
        assert next_phase(Phase.WELCOME, PhaseEvent.START) is Phase.PLAYING
        assert next_phase(Phase.PLAYING, PhaseEvent.COLLISION) is Phase.GAME_OVER
        assert next_phase(Phase.GAME_OVER, PhaseEvent.RESTART) is Phase.PLAYING

    def test_undefined_transitions_keep_phase(self):
        assert next_phase(Phase.PLAYING, PhaseEvent.START) is Phase.PLAYING
        assert next_phase(Phase.WELCOME, PhaseEvent.COLLISION) is Phase.WELCOME
        assert next_phase(Phase.GAME_OVER, PhaseEvent.COLLISION) is Phase.GAME_OVER
        assert next_phase(Phase.WELCOME, PhaseEvent.RESTART) is Phase.WELCOME


class TestStartEvent:
    def test_mapping(self):
        assert start_event(Phase.WELCOME) is PhaseEvent.START
        assert start_event(Phase.GAME_OVER) is PhaseEvent.RESTART
        assert start_event(Phase.PLAYING) is None
