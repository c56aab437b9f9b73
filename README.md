# ogun

An additive wavetable synthesis voice. A spectrum of harmonics is shaped by
editable breakpoint curves, turned into a single-cycle wavetable with an
inverse real FFT, and played back with linear interpolation. The table is
rebuilt about a thousand times a second (every `round(sample_rate / 1000)`
samples), and each new table is cross-faded in from the old one over at most
10 ms. When a phase-move amount is set, the harmonic phases drift on every
rebuild, so the timbre moves over time.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `ogun.processor`: `OgunProcessor`, a stereo processor that holds one voice
  and its named parameters (`FloatParameter`, `IntParameter`,
  `BoolParameter`). It listens to the voice's timbre curves and marks the
  voice's bins as changed when they are edited.
- `ogun.note`: `OgunNote`, the synthesis voice. It renders into
  one-dimensional numpy arrays.
- `ogun.curve`: `Curve`, a breakpoint curve rendered to a lookup table, with
  `Point`, `PowerType`, `CurveInit`, `CurveListener`, `power_y_value` and
  `power_type_name`. Each segment is shaped as exponential, as a sine,
  triangle or square wave, or held flat (`KEEP`). The curve calls its
  listeners' `on_add_point`, `on_remove_point`, `on_point_xy_changed`,
  `on_point_power_changed` and `on_reload` hooks when it changes.
- `ogun.audiofft`: `AudioFFT`, a real FFT and inverse FFT on power-of-two
  sizes, with `complex_size` and `is_power_of_2`. Spectra are split into real
  and imaginary lists of `size // 2 + 1` bins from DC to Nyquist; `ifft`
  undoes `fft`.
- `ogun.ooura`: `OouraFFT`, the radix-4 real DFT that `AudioFFT` runs on.
- `ogun.listeners`: `ListenerList`, an ordered list of listeners with no
  duplicates, notified by method name.
- `ogun.quad_osc`: `QuadOsc`, a quadrature sine/cosine oscillator.

## Usage

```python
import numpy as np
from ogun.processor import OgunProcessor

proc = OgunProcessor()
proc.prepare_to_play(48000.0, 512)

proc.set_parameter("freq", 220.0)
proc.set_parameter("harmonic_num", 8)
proc.set_parameter("volume", -6.0)

left = np.zeros(512, dtype=np.float32)
right = np.zeros(512, dtype=np.float32)
proc.process_block(left, right)  # renders into left, copies into right
```

`prepare_to_play` must be called before the first block; it sets up the voice
and pushes every parameter value to it. `set_parameter` clamps the value to the
parameter's range (integers are rounded first) and applies it at once. An
unknown id raises `KeyError`.

| id               | type  | range        | default |
|------------------|-------|--------------|---------|
| `freq`           | float | 50 – 500 Hz  | 110     |
| `harmonic_num`   | int   | 4 – 13       | 10      |
| `phase_seed`     | int   | 0 – 100      | 0       |
| `saw_slope`      | bool  |              | true    |
| `phmove_mulfreq` | bool  |              | true    |
| `volume`         | float | -20 – 40 dB  | 0       |
| `phase_move`     | float | 0 – 5000     | 0       |

`harmonic_num` is log2 of the spectrum size, so 10 gives 512 harmonic bins.
Each step above 10 lowers the pitch by an octave. Harmonics above
`min(sample_rate / 2, 20000)` Hz are left out. `saw_slope` divides the n-th
harmonic's amplitude by n. `phase_seed` draws new random starting phases.
When `phmove_mulfreq` is off, the phase drift of each harmonic is also scaled
by its harmonic number.

You can also drive the voice directly and shape its spectrum:

```python
import numpy as np
from ogun.note import OgunNote
from ogun.curve import Point, PowerType

note = OgunNote()
note.init(44100.0)
note.set_harmonic_num(10)
note.set_phase_seed(3)
note.set_use_saw_slope(True)
note.set_volume(0.0)
note.set_frequency(110.0)

note.timbre_amp.add_point(Point(0.5, 0.2, 0.0, PowerType.EXP))

block = np.zeros(1024, dtype=np.float32)
note.process(block)
```

`OgunNote.process` raises `RuntimeError` if `init` has not been called.
`set_harmonic_num` raises `ValueError` outside 4..13. The voice's curves are
`timbre_amp`, `timbre_formant` and `phase_move_map`.

The FFT on its own:

```python
from ogun.audiofft import AudioFFT

fft = AudioFFT(8)
re, im = fft.fft([1, 2, 3, 4, 5, 6, 7, 8])
samples = fft.ifft(re, im)  # back to 1.0 .. 8.0
```

## What it does not do

This package is the sound engine only. It has no graphical editor for the
curves or the parameters, and it does not load as a plugin in an audio host.
It does not read MIDI: the voice plays one continuous note at the `freq`
parameter. Parameter and curve state is not saved or restored.