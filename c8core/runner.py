#!/usr/bin/env python3

"""
Runner

Drives a CPU in real time, plugged into host renderer, input and audio
plugins.  The CPU itself knows nothing about time, so this decides when each
instruction runs.

Timers, inputs, the buzzer and the display are all handled together at 60Hz,
independently of the clock speed.  If the CPU gets lagged, the timers are not
caught up, they simply run late.

The clock speed is kept by busy-waiting between instructions.  Sleeping is far
too coarse on most hosts for hundreds of instructions a second.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, TIMER_FREQ

FRAME_INTERVAL = 1.0 / TIMER_FREQ


class Runner:
    def __init__(self, cpu, renderer, inputs, audio, clock_speed=None):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio

        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        # User can specify 0 for uncapped
        self.core_interval = None if clock_speed <= 0 else 1.0 / clock_speed

        # Performance-related vars
        self.next_frame_time = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run(self):
        cpu = self.cpu
        core_interval = self.core_interval

        while True:
            this_time = perf_counter()  # Do this first for maximum precision

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                # Reporting the performance should be done before a refresh, as refreshing will likely show the report
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            # Everything other than the CPU itself happens at 60Hz
            if this_time >= self.next_frame_time:
                if self.inputs.process_messages():
                    return

                self.next_frame_time = this_time + FRAME_INTERVAL
                self.run_frame()

            cpu.execute_cycle()
            self.perf_counter_ops += 1

            if core_interval is not None:
                # Wait for next CPU instruction.  Do this last for maximum precision (takes into account time spent on
                # this instruction)
                next_time = this_time + core_interval

                while perf_counter() < next_time:  # Unfortunately we have to do this to get the timing right
                    pass

    def run_frame(self):
        cpu = self.cpu
        cpu.tick_timers()
        self.audio.enable_buzzer(cpu.sound_active())
        self.renderer.refresh_display(cpu.framebuffer)
        self.perf_counter_fps += 1

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))
