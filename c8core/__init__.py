#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT
from .cpu import CPU
from .hostio import Loader
from .runner import Runner
from .stack import StackError
from .tracer import Tracer


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))

    opt_renderer = args["renderer"]
    auto_select_renderer = opt_renderer is None  # If necessary, try PyGame first, then Curses.
    mute_audio = args["mute"]

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            opt_renderer = "pygame"
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            # PyGame can handle proper waveforms
            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                )

            raise StartupError(
                "Curses (or Windows-Curses) does not appear to be installed."
            )
        else:
            from .inputs.i_curses import Inputs
            from .renderers.r_curses import Renderer

            # Terminals can handle fixed-length beeps, but not sampled sound
            if mute_audio or mute_audio is None:
                from .audio.a_null import Audio
            else:
                from .audio.a_curses import Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

    # Read the ROM before anything takes over the display, so load errors are readable
    rom = Loader().load_binary(args["filename"])

    # Set up tracer and live output if necessary
    tracer = Tracer()
    tracer.set_live(args["debug"])

    # Create a new CPU with its own RAM, stack, framebuffer and keypad, then copy the ROM in at the default address
    cpu = CPU(tracer=tracer, seed=args["seed"], halt_on_unsupported=args["halt_on_unsupported"])
    cpu.load_rom(rom)

    # Set up a new rendering system matching the framebuffer
    renderer = Renderer(scale=args["scale"], curses_cursor_mode=args["curses_cursor_mode"])
    renderer.set_resolution(*cpu.framebuffer.get_vid_size())

    # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
    inputs = Inputs(args["keymap"], renderer, cpu.keypad)
    audio = Audio()
    runner = Runner(cpu, renderer, inputs, audio, clock_speed=args["clock_speed"])

    try:
        try:
            runner.run()
        finally:
            # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
            audio.shutdown()
            inputs.shutdown()
            renderer.shutdown()
    except StackError:
        # The display is back to normal by now, so the state dump can be seen
        print("{}Debug info:\n{}".format(APP_INTRO, tracer.debug(cpu, "(halted)", verbose=True)))
        raise

    if cpu.unsupported_count:
        print("{} unsupported instruction(s) were skipped.".format(cpu.unsupported_count))
