# aprsgate

Building blocks for an APRS-IS gateway: a small APRS-IS client, a
background task that forwards queued packets to an APRS-IS server, a
simple task registry with shared system state, detection of common LoRa
boards, switching of an AXP192 power chip, a JSON configuration base
class, a monochrome bitmap with a built-in 8-pixel font, an SSD1306
OLED driver, and a millisecond timer.

The package uses only the Python standard library. Diagnostic messages
go through the standard `logging` module.

## What is inside

| Module | Provides |
| --- | --- |
| `aprsgate.aprsis` | `AprsIsClient` and the errors `AprsIsError`, `AprsIsConnectionError`, `AprsIsPasscodeError` |
| `aprsgate.aprsis_task` | `AprsIsTask`, which keeps a connection alive and sends queued packets |
| `aprsgate.tasks` | `Task`, `TaskManager`, `TaskDisplayState` and the shared `System` state |
| `aprsgate.boards` | `BoardType`, `BoardConfig`, `BoardFinder` and the known boards in `BOARD_CONFIGS` |
| `aprsgate.power` | `PowerManagement` and `PowerChannel` for the AXP192 power chip |
| `aprsgate.config` | `ConfigurationManagement`, a base class for JSON configuration files |
| `aprsgate.bitmap` | `Bitmap`, a 1-bit frame buffer with lines, rectangles, circles, a progress bar and text |
| `aprsgate.font` | `FontDesc`, the `TERMINAL_8` font and `system_font()` |
| `aprsgate.display` | `Geometry`, `OLEDDisplay` and `SSD1306` |
| `aprsgate.timer` | `Timer` |

## Talking to APRS-IS

```python
from aprsgate.aprsis import AprsIsClient, AprsIsConnectionError, AprsIsPasscodeError

passcode = "placeholder"
with AprsIsClient("N0CALL", passcode, "aprsgate", "0.2") as client:
    try:
        client.connect("aprs.example.com", 14580, "r/48.0/11.0/50")
    except AprsIsConnectionError:
        print("server not reachable")
    except AprsIsPasscodeError:
        print("login was not verified")
    else:
        client.send_message("N0CALL>APRS:>hello")
        print(client.get_aprs_line())
```

`connect` sends the login line returned by `login_line()`
(`user ... pass ... vers ...`, with a `filter` part when one is given)
and waits up to `client.timeout` seconds for the server's `logresp`.
A reply containing `unverified` raises `AprsIsPasscodeError`; no reply,
or a refused connection, raises `AprsIsConnectionError`.
`send_message` returns `False` when there is no connection.
`get_message` returns the next received line or an empty string;
`get_aprs_line` returns `None` for empty reads and for server comments
(lines starting with `#`).

## Forwarding packets

`AprsIsTask` is a `Task` that, once started, runs `step()` every
`poll_interval` seconds until `stop()` is called. Each round it does
nothing while `System.is_wifi_or_eth_connected()` is false, otherwise it
(re)connects the client when needed, reads one incoming line, and sends
one item from its queue. Queue items are strings or objects whose
`encode()` returns a string. The task's `state` and `state_info` show
whether the last connection attempt succeeded.

```python
import queue
from aprsgate.aprsis import AprsIsClient
from aprsgate.aprsis_task import AprsIsTask
from aprsgate.tasks import System

system = System()
system.wifi_connected = True
outbox = queue.Queue()
task = AprsIsTask(system, outbox, AprsIsClient("N0CALL", "placeholder", "aprsgate", "0.2"),
                  "aprs.example.com", 14580)
system.task_manager.add_task(task)
task.start()
outbox.put("N0CALL>APRS:>hello")
```

## Drawing on a bitmap

```python
from aprsgate.bitmap import Bitmap

bitmap = Bitmap(128, 64)
bitmap.draw_rect(0, 0, 128, 64)
next_x = bitmap.draw_string(2, 2, "APRS-IS")
bitmap.draw_progress_bar(2, 40, 120, 10, 75)
assert bitmap.get_pixel(0, 0)
```

Pixels outside the bitmap are ignored. The buffer is laid out in
8-row pages as SSD1306 controllers expect (`bitmap.buffer`). Text uses
the built-in terminal font returned by `system_font()`; characters the
font lacks are drawn as `?`, and `draw_string_lf` wraps to the left edge
when a character would run past the right edge.

`SSD1306(bus, address, geometry)` sends its init sequence on creation
and `display(bitmap)` transfers a bitmap. The bus is any object with a
`write(address, data)` method that sends one I2C transmission.

## Board detection and power

`BoardFinder(BOARD_CONFIGS, hardware)` probes for a display at each
board's OLED address, and failing that for a LoRa modem over SPI,
switching on the AXP192 rails first on boards that need them.
`hardware` supplies pin, I2C and SPI access (`pin_output`,
`digital_write`, `delay_ms`, `i2c_begin`, `i2c_end`, `i2c_probe`,
`i2c_write`, `i2c_read`, `spi_begin`, `spi_transfer`, `spi_end`,
`power_chip`). `get_board_config(name)` looks a board up by name.

## Configuration files

Subclass `ConfigurationManagement` and implement
`read_project_configuration(data, conf)` and
`write_project_configuration(conf, data)`. `read_configuration` leaves
the configuration untouched when the file is missing and passes an empty
dict when it is not valid JSON; `write_configuration` replaces the file.

## Timer

`Timer(timeout_ms, clock)` expires `timeout_ms` milliseconds after
`start()`; `check()` tells whether it has, and
`trigger_time_in_sec()` how many whole seconds remain. `clock` defaults
to a monotonic millisecond clock.

## What it does not do

There is no command-line program and no ready-made gateway: the pieces
have to be wired together by your own code. The package talks to no
real hardware; board probing, the power chip and the display all work
through objects you supply. It does not decode APRS packets —
received lines are returned as text — and it has no console logger or
syslog sender of its own beyond standard `logging`.

## Running the tests

Install the `test` extra and run `pytest`.