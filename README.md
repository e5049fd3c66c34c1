# stratos

A small simulated kernel that runs on the host, together with the pieces it is built from:

- `stratos.scheduler`: a tick-driven periodic task scheduler (`Scheduler`, `UserTask`, `SchedulerState`, `SchedulerError`)
- `stratos.timer`: a thread-driven simulated system timer (`SimTimer`, `TimerError`) and busy-wait delays (`delay_us`, `delay_ms`, `delay_sec`)
- `stratos.config`: sensor configuration types (`KernelConfig`, `SensorConfig`, `Hcsr04Config`, `SensorHardware`) and `get_system_config()`, which returns one HC-SR04 sensor with trig pin 25 and echo pin 24
- `stratos.sensors`: the sensor manager (`SensorManager`, `SensorControlBlock`, `SensorType`, `get_sensor_type`, `SensorError`)
- `stratos.hc_sr04`: an HC-SR04 ultrasonic sensor driver (`Hcsr04Driver`, `Hcsr04Instance`) working on a GPIO controller
- `stratos.gpio`: an in-memory model of the BCM2xxx GPIO registers (`GpioController`, `GpioFunction`), pins 0 to 53
- `stratos.sockets`: a socket descriptor table (`SocketApi`, `SocketDef`, `AddressFamily`, `SocketType`, `NetError`) with in-memory UDP procedures `udp_tx` and `udp_rx`
- `stratos.net`: `SimNetwork`, a UDP socket bound to the device address that receives packets and prints them
- `stratos.usb`: USB packet identifiers (`PidCode`, `pid_byte`, `parse_pid`) and `usb_core_init`
- `stratos.printf`: a compact printf handling `%d %u %x %X %c %s %%` with zero padding and field width (`format_printf`, `sprintf`, `Printer`)
- `stratos.kernel`: the simulated kernel (`SimKernel`) and the command entry point `main`

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the simulator

```
stratos-sim
stratos-sim --seconds 10
```

This boots the simulated kernel: it binds a UDP socket to 192.168.1.100 port 8000, starts the simulated timer with a 1 ms tick, prints the kernel banner and version, and hands control to the scheduler. The scheduler runs a TTY task that prints `TTY task is alive...` and a network task that waits for a UDP packet and prints `packet_data=...`. If the address cannot be bound, a warning is logged and the network task logs each failed receive. Without `--seconds` it runs until interrupted.

## Using the pieces

```python
from stratos.printf import sprintf
from stratos.scheduler import Scheduler, UserTask

sprintf("%04x|%5s", 255, "ab")   # '00ff|   ab'

calls = []
sched = Scheduler(timer_alloc=lambda cb, us: None, tick_us=1000)
sched.init([UserTask(period_ms=10, task_func=lambda: calls.append(1))])
for _ in range(10):
    sched.tick()
    sched.step()
```

`Scheduler.tick()` is what the timer calls each tick; it decides which task is due. `Scheduler.step()` runs the task that was queued, and `Scheduler.run(stop)` keeps stepping until `stop()` returns true.

```python
from stratos.config import Hcsr04Config, SensorConfig, SensorHardware
from stratos.gpio import GpioController
from stratos.hc_sr04 import Hcsr04Driver
from stratos.timer import delay_us

gpio = GpioController()
driver = Hcsr04Driver(gpio, delay_us)
instance = driver.register_sensor(
    SensorConfig(SensorHardware.HCSR04, Hcsr04Config(trig=25, echo=24))
)
gpio.function_of(25)   # GpioFunction.OUTPUT
```

`Hcsr04Driver.measure()` waits for the echo pin to go high and then counts microseconds until it goes low, so with the in-memory GPIO model something must drive the echo pin with `GpioController.drive_level()`.

Errors are raised as exceptions: `SchedulerError`, `TimerError`, `SensorError`, `ConfigError`, `NetError` and `UsbCoreError`.

## What it does not do

- It talks to no real hardware. GPIO is an in-memory register model, the timer is a background thread, and the UART, interrupt and debug LED are only flags on `SimKernel` or absent.
- `usb_core_init()` with its defaults always raises `UsbCoreError`: there is no USB host controller in the simulator.
- `SocketApi` only serves datagram sockets; stream and raw sockets are refused with `NetError`. Its UDP procedures move data through an in-memory buffer and send nothing on a network.
- `Scheduler.activate_task()` is not supported and always raises `SchedulerError`. Task overruns are detected and logged but not acted on.