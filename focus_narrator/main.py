"""Sample host wiring the engine to a scripted key sequence.

Screens here are stand-ins for the host application's own views.
"""

import argparse

from focus_narrator.config import settings
from focus_narrator.exceptions import ConfigError
from focus_narrator.focus import FocusManager
from focus_narrator.input import InputDispatcher, parse_binding
from focus_narrator.logging import LoggerFactory, setup_logging
from focus_narrator.menu import NavigableMenu
from focus_narrator.speech import LogSink

FRAME_TIME = 1 / 60


class OptionsDialog:
    name = "Options"

    def __init__(self, focus, sink, wrap=False):
        self.focus = focus
        self.menu = NavigableMenu(self.name, sink, wrap=wrap)
        self.volume = 50
        self.fullscreen = False

    def build_menu(self):
        self.menu.clear()
        self.menu.add(lambda: f"Volume {self.volume}%", on_adjust=self._adjust_volume, hotkey="v")
        self.menu.add(
            lambda: f"Fullscreen {'on' if self.fullscreen else 'off'}",
            self._toggle_fullscreen,
            hotkey="f",
        )
        self.menu.add("Close", lambda: self.focus.hide_overlay(self))

    def _adjust_volume(self, delta):
        self.volume = max(0, min(100, self.volume + delta))

    def _toggle_fullscreen(self):
        self.fullscreen = not self.fullscreen
        self.menu.announce_current()


class MainMenuScreen:
    name = "Main Menu"

    def __init__(self, focus, sink, wrap=False):
        self.focus = focus
        self.sink = sink
        self.menu = NavigableMenu(self.name, sink, wrap=wrap)
        self.options_dialog = OptionsDialog(focus, sink, wrap=wrap)
        self.quit_requested = False

    def build_menu(self):
        self.menu.clear()
        self.menu.add("Play", lambda: self.sink.speak("Starting game", True), hotkey="p")
        self.menu.add("Options", lambda: self.focus.show_overlay(self.options_dialog), hotkey="o")
        self.menu.add("Quit", self._quit, hotkey="q")

    def _quit(self):
        self.quit_requested = True
        self.sink.speak("Goodbye", True)


def run_script(dispatcher, keys):
    for text in keys:
        key, modifiers = parse_binding(text)
        dispatcher.key_down(key, modifiers)
        dispatcher.update(FRAME_TIME)
        dispatcher.key_up(key)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Keyboard and speech navigation demo")
    parser.add_argument(
        "-k",
        "--keys",
        default="down,enter,right,right,escape,down,down",
        help="Comma separated key script, e.g. 'down,home,enter'",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable verbose debug output")
    parser.add_argument("--trace", action="store_true", help="Log every key event")
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, trace=args.trace)
    log = LoggerFactory.for_system()

    try:
        config = settings.build_input_config()
    except ConfigError as error:
        log.error(str(error))
        return 2

    sink = LogSink()
    focus = FocusManager(sink)
    dispatcher = InputDispatcher(focus, config)
    screen = MainMenuScreen(focus, sink, wrap=settings.get_bool("wrap_navigation"))
    focus.set_screen(screen)

    keys = [key for key in args.keys.split(",") if key.strip()]
    try:
        run_script(dispatcher, keys)
    except ConfigError as error:
        log.error(str(error))
        return 2
    log.info(f"Replayed {len(keys)} keys")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
