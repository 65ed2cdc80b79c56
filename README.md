# motorcarrier

A pure-Python model of the co-processor on a small motor-carrier board. It
runs timed jobs, drives DC and servo motors, reads encoders and the battery,
and closes PID loops on position or velocity. All of this happens on a
simulated `Board`. The board's clock moves only when you call
`Board.advance`, so every run is deterministic.

## Installing

```
pip install .
pip install ".[test]"   # adds pytest
```

The package has no runtime dependencies.

## Modules

- `motorcarrier.fixedpoint`
  - `FixedPoint` holds a signed number with a chosen base `width` (8, 16, 32
    or 64 bits) and a chosen number of `frac_bits`.
  - Arithmetic wraps in two's complement at the base width.
  - Division truncates towards zero.
  - Multiplication and division go through an intermediate of double width.
  - `to_int()` rounds towards negative infinity.
  - `FixedPoint.from_raw` builds a value from its stored integer.
  - `fp8`, `fp16`, `fp32`, `fp64` and `q24_8` are shortcuts. `q24_8` gives the
    Q24.8 format that the PID code uses.
  - `fixed_multiply`, `float_to_raw_fix32` and `double_to_raw_fix32` work on
    raw integers.
- `motorcarrier.fix16`
  - Helpers for Q16.16 values held as plain ints: `from_int`, `to_float`,
    `to_double`, `to_int`, `from_float`, `from_double`, `f16`, `f16c`,
    `absolute`, `floor`, `ceil`, `minimum`, `maximum` and `clamp`.
  - Constants such as `ONE`, `PI`, `E`, `MAXIMUM` and `MINIMUM`.
  - `f16c(123, "1234")` gives the constant 123.1234. The second argument is
    the string of digits written after the decimal point.
- `motorcarrier.commands`
  - The `Command` and `IRQCause` enumerations of the I2C protocol.
  - `I2C_ADDRESS` (0x66).
  - The `Carrier` variants (`MKR`, `NANO`) and their pin maps:
    `encoder_pins`, `host_motor_pins` and `host_analog_inputs`.
  - Fixed pin constants such as `MOTOR_1_PINS`, `MOTOR_2_PINS`, `SERVO_PINS`
    and `ADC_BATTERY`.
- `motorcarrier.board`
  - `Board` provides `millis()` and `advance(ms)`, plus `pin_mode`,
    `analog_write`, `analog_read` and `set_analog_input`. `set_analog_input`
    only accepts values from 0 to 1023.
  - `Reply` collects the bytes of a reply to the host:
    - integers as four little-endian bytes;
    - booleans as one byte;
    - bytes-like values unchanged.
- `motorcarrier.events`
  - `TimedEvent` runs a callback at most once per period.
  - `EventScheduler` holds up to `capacity` events (10 by default) and runs
    the due ones with `run_due()`.
  - Registering past capacity raises `OverflowError`.
- `motorcarrier.pid`
  - `PID` is a controller in Q24.8 arithmetic, with `Direction` and
    `ProportionalOn` options.
  - It has `input`, `setpoint` and `output` attributes.
  - `compute()` only produces a new output in automatic mode and once a full
    sample period has passed.
  - Negative gains and invalid limits are ignored.
- `motorcarrier.motors`
  - `DCMotor.set_duty` takes -100 to 100 percent. The sign picks which of the
    two pins gets the PWM value, scaled to 0–255. A duty of 0 stops the motor.
  - `ServoMotor.set_duty` writes the duty to its pin. A negative duty switches
    the pin to input.
  - For both classes, `set_frequency` only records the requested value.
- `motorcarrier.battery`
  - `Battery` keeps a ring of ten ADC readings. When given a scheduler, it
    samples once a second.
  - `raw()` returns the latest reading.
  - `converted()` returns that reading divided by the carrier's scale factor
    (77 for MKR, 236 for Nano).
  - `filtered()` returns the scaled mean of the ring.
- `motorcarrier.encoder`
  - `EncoderChannel` holds a counter, which `move` advances, and the registers
    the host reads.
  - `EncoderMonitor.update()` runs every 10 ms when scheduled. It:
    - derives velocity and position;
    - sets the overflow and underflow flags;
    - calls `request_attention` with an `IRQCause` when a target count or
      target velocity is reached.
- `motorcarrier.controller`
  - `ClosedLoopMotor` couples a `DCMotor` to an `EncoderChannel` through a
    position PID and a velocity PID.
  - The mode is a `ControlMode`. Setpoints are set with `Target`.
  - `register_controllers` schedules the controllers to step on every
    scheduler pass.

## Example

```python
from motorcarrier.board import Board
from motorcarrier.commands import MOTOR_1_PINS, Carrier
from motorcarrier.controller import ClosedLoopMotor, Target, register_controllers
from motorcarrier.encoder import EncoderChannel, EncoderMonitor
from motorcarrier.events import EventScheduler
from motorcarrier.motors import DCMotor

board = Board(Carrier.MKR)
scheduler = EventScheduler(board.millis)

motor = DCMotor(board, *MOTOR_1_PINS)
encoder = EncoderChannel()
interrupts = []
EncoderMonitor([encoder], interrupts.append, scheduler)

loop = ClosedLoopMotor(motor, encoder, board.millis)
loop.set_setpoint(Target.VELOCITY, 20)
register_controllers([loop], scheduler)

for _ in range(100):
    encoder.move(2)          # pretend the shaft turned
    scheduler.run_due()
    board.advance(1)

print(motor.duty, board.outputs)
```

## What it does not do

- It does not talk to real hardware. The `Board` is a simulation: pins are
  dictionaries, and the clock is a counter.
- It has no I2C command handler. `Command`, `I2C_ADDRESS` and `Reply` describe
  the protocol, but nothing parses host requests or dispatches them to the
  motors, encoders or battery. You call those objects directly.
- `set_max_acceleration` and `set_max_velocity` store their values, but the
  control loops do not use them.
- There is no command-line program.