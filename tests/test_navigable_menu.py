"""
Tests for focus_narrator.menu.navigable.NavigableMenu.

This test suite covers:
- Index bounds under arbitrary movement (clamp and wrap policies)
- Default positional narration and custom readers
- Rebuild semantics and preserved positions
- Empty-menu safety
- Adjust/confirm dispatch to the current option
- Hotkeys, help text and title reading
"""

import random
from unittest.mock import Mock

import pytest

from focus_narrator.menu import MenuOption, NavigableMenu


class TestNavigation:
    def test_starts_at_first_option(self, main_menu):
        assert main_menu.current_index == 0
        assert main_menu.count == 3

    def test_first_option_sets_index_zero(self, sink):
        menu = NavigableMenu("Menu", sink)
        assert menu.current_option is None
        menu.add_option(MenuOption("Only"))
        assert menu.current_index == 0
        assert menu.current_option.text == "Only"

    def test_move_down_to_end_and_clamp(self, main_menu, sink):
        """Play/Options/Quit: two downs reach Quit, a third stays there."""
        main_menu.move_down()
        main_menu.move_down()

        assert main_menu.current_index == 2
        assert sink.last == "Quit, item 3 of 3"

        main_menu.move_down()

        assert main_menu.current_index == 2
        assert sink.last == "Quit, item 3 of 3"

    def test_move_up_clamps_at_start(self, main_menu, sink):
        main_menu.move_up()

        assert main_menu.current_index == 0
        assert sink.last == "Play, item 1 of 3"

    def test_wrap_policy(self, sink):
        menu = NavigableMenu("Menu", sink, wrap=True)
        for label in ["A", "B", "C"]:
            menu.add(label)

        menu.move_up()
        assert menu.current_index == 2
        menu.move_down()
        assert menu.current_index == 0

    @pytest.mark.parametrize("wrap", [False, True])
    def test_index_stays_in_bounds_for_random_moves(self, sink, wrap):
        menu = NavigableMenu("Menu", sink, wrap=wrap)
        for label in range(5):
            menu.add(str(label))
        rng = random.Random(1234)

        for _ in range(500):
            rng.choice([menu.move_up, menu.move_down, menu.move_first, menu.move_last])()
            assert 0 <= menu.current_index < menu.count

    def test_move_first_and_last(self, main_menu, sink):
        main_menu.move_last()
        assert main_menu.current_index == 2
        main_menu.move_first()
        assert main_menu.current_index == 0
        assert sink.last == "Play, item 1 of 3"

    def test_navigation_narration_interrupts(self, main_menu, sink):
        main_menu.move_down()
        assert sink.messages[-1] == ("Options, item 2 of 3", True)


class TestEmptyMenu:
    def test_all_operations_are_silent_noops(self, sink):
        menu = NavigableMenu("Empty", sink)

        menu.move_up()
        menu.move_down()
        menu.move_first()
        menu.move_last()
        menu.adjust_left()
        menu.adjust_right()
        menu.confirm()
        menu.announce_current()
        menu.set_index(3)

        assert menu.current_index == 0
        assert menu.narration() is None
        assert menu.select_hotkey("x") is False
        assert sink.messages == []

    def test_menu_without_sink_never_raises(self):
        menu = NavigableMenu("Silent")
        menu.add("Play")
        menu.move_down()
        menu.announce_current()
        assert menu.current_index == 0


class TestRebuild:
    def test_rebuild_resets_index_and_narration(self, main_menu, sink):
        main_menu.move_last()

        main_menu.rebuild([MenuOption("Resume"), MenuOption("Save"), MenuOption("Exit")])
        main_menu.announce_current()

        assert main_menu.current_index == 0
        assert sink.last == "Resume, item 1 of 3"

    def test_rebuild_replaces_all_options(self, main_menu):
        main_menu.rebuild([MenuOption("Only")])
        assert [option.text for option in main_menu.options] == ["Only"]

    def test_rebuild_can_preserve_index(self, main_menu):
        main_menu.set_index(1)
        main_menu.rebuild([MenuOption(str(i)) for i in range(4)], preserve_index=True)
        assert main_menu.current_index == 1

    def test_preserved_index_is_clamped_to_new_length(self, main_menu):
        main_menu.move_last()
        main_menu.rebuild([MenuOption("Only")], preserve_index=True)
        assert main_menu.current_index == 0

    def test_rebuild_to_empty(self, main_menu):
        main_menu.move_last()
        main_menu.rebuild([])
        assert main_menu.is_empty
        assert main_menu.current_index == 0

    def test_clear_then_add_restarts_at_zero(self, main_menu):
        main_menu.move_last()
        main_menu.clear()
        main_menu.add("New")
        assert main_menu.current_index == 0
        assert len(main_menu) == 1

    def test_set_index_clamps(self, main_menu):
        main_menu.set_index(10)
        assert main_menu.current_index == 2
        main_menu.set_index(-4)
        assert main_menu.current_index == 0


class TestOptionDispatch:
    def test_confirm_calls_current_option(self, sink):
        play, quit_ = Mock(), Mock()
        menu = NavigableMenu("Menu", sink)
        menu.add("Play", play)
        menu.add("Quit", quit_)

        menu.move_down()
        menu.confirm()

        quit_.assert_called_once_with()
        play.assert_not_called()

    def test_confirm_without_handler_is_noop(self, main_menu):
        main_menu.confirm()

    def test_slider_text_is_recomputed_after_adjust(self, sink):
        """A 0-100 slider at 50 reads 51% after adjusting right."""
        state = {"value": 50}
        on_adjust = Mock(side_effect=lambda delta: state.update(value=state["value"] + delta))
        menu = NavigableMenu("Options", sink)
        menu.add(lambda: f"{state['value']}%", on_adjust=on_adjust)

        menu.adjust_right()
        on_adjust.assert_called_once_with(1)

        menu.announce_current()
        assert sink.last == "51%, item 1 of 1"

    def test_adjust_left_passes_negative_delta(self, sink):
        on_adjust = Mock()
        menu = NavigableMenu("Options", sink)
        menu.add("Volume", on_adjust=on_adjust)

        menu.adjust_left()

        on_adjust.assert_called_once_with(-1)

    def test_adjust_on_plain_option_announces_nothing(self, main_menu, sink):
        main_menu.adjust_right()
        assert sink.messages == []

    def test_failing_callback_is_contained(self, sink):
        menu = NavigableMenu("Menu", sink)
        menu.add("Broken", Mock(side_effect=RuntimeError("boom")))

        menu.confirm()

        assert menu.current_index == 0

    def test_failing_text_provider_is_contained(self, sink):
        def broken_text():
            raise RuntimeError("host text failed")

        menu = NavigableMenu("Menu", sink)
        menu.rebuild([MenuOption("Play"), MenuOption(broken_text)])

        menu.move_down()

        assert menu.current_index == 1
        assert sink.last == ", item 2 of 2"


class TestNarration:
    def test_custom_reader_overrides_default(self, sink):
        on_read = Mock()
        menu = NavigableMenu("Menu", sink)
        menu.add("Card", on_read=on_read)

        menu.announce_current()

        on_read.assert_called_once_with()
        assert sink.messages == []

    def test_start_reading_announces_title_then_option(self, main_menu, sink):
        main_menu.start_reading()
        assert sink.messages == [("Main Menu", True), ("Play, item 1 of 3", False)]

    def test_start_reading_without_title(self, main_menu, sink):
        main_menu.start_reading(announce_name=False)
        assert sink.messages == [("Play, item 1 of 3", True)]

    def test_select_hotkey(self, sink):
        menu = NavigableMenu("Menu", sink)
        menu.add("Play", hotkey="p")
        menu.add("Quit", hotkey="q")

        assert menu.select_hotkey("Q") is True
        assert menu.current_index == 1
        assert sink.last == "Quit, item 2 of 2"
        assert menu.select_hotkey("z") is False
        assert menu.current_index == 1

    def test_help_text_mentions_adjust_only_when_relevant(self, main_menu, sink):
        assert "Left and Right" not in main_menu.help_text()

        main_menu.add("Volume", on_adjust=lambda delta: None)

        assert "Left and Right: adjust" in main_menu.help_text()
