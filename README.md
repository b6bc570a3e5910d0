# tickplot

Building blocks for plot axes:

- **Tick labelling** (`tickplot.labelling`): a search for "nice" label values over a data range. It uses the Talbot–Lin–Hanrahan method.
- **Axis scales and tickers** (`tickplot.axis`): linear, logarithmic and inverted scales. It also has default, logarithmic, constant, time-based and function-backed tickers, and a simple `Axis` range holder.
- **Image comparison** (`tickplot.imagecmp`): format-aware equality of rendered images, intensity-scaled difference images, and golden reference file paths.

## Installation

```
pip install tickplot
```

To run the tests, install the `test` extra:

```
pip install "tickplot[test]"
pytest
```

## Nice labels

```python
from tickplot.labelling import Containment, talbot_lin_hanrahan

values, step, q, magnitude = talbot_lin_hanrahan(555.6545, 21800.9875, 3)
# values == [0, 10000, 20000], step == 1, magnitude == 4
```

The signature is `talbot_lin_hanrahan(d_min, d_max, want, containment, q, w, legibility)`. It returns `(values, step, q, magnitude)`:

- `step` is the label step before it is scaled by `10**magnitude`.
- `q` is the nice number that was chosen.

If the range is too narrow, or no candidate is found, the function falls back to evenly spaced values. In that case `q` is `0` and `step` is the real distance between values. If `d_min > d_max`, it raises `ValueError`.

The optional arguments have these defaults:

- `containment` defaults to `Containment.FREE`. `Containment.CONTAIN_DATA` makes the labels span the data. `Containment.WITHIN_DATA` keeps every label inside the data range.
- `q=None` uses the nice numbers `1, 5, 2, 2.5, 4, 3` (`DEFAULT_NICE_NUMBERS`).
- `w=None` uses `Weights()`, which is simplicity 0.25, coverage 0.2, density 0.5 and legibility 0.05.
- `legibility=None` uses `unit_legibility`, which scores every labelling as 1.

The partial scores are also public: `simplicity`, `max_simplicity`, `coverage`, `max_coverage`, `density`, `max_density` and `min_abs_mag`.

## Axes and ticks

```python
from tickplot.axis import Axis, DefaultTicks, InvertedScale, LinearScale

ticks = DefaultTicks().ticks(3.096916 - 0.125, 3.096916 + 0.125)
major = [t.label for t in ticks if not t.is_minor()]   # ["3.0", "3.1", "3.2"]

InvertedScale(LinearScale()).normalize(0, 1, 1)   # 0.0

axis = Axis(min=1, max=1)
axis.sanitize_range()     # widens to min=0, max=2
axis.norm(1.5)            # 0.75
```

### Ticks and tickers

- `Tick(value, label)` is a tick mark. An empty label marks a minor tick.
- `DefaultTicks(suggested_tick=0)` picks labelled major ticks that lie within the range, and adds minor ticks between them. With the default of `0`, about three major ticks are aimed for. It raises `ValueError` if `max_ <= min_`.
- `LogTicks()` puts a labelled tick at each power of ten and minor ticks between them. It raises `ValueError` for non-positive bounds.
- `ConstantTicks([...])` always returns the same ticks.
- `TickerFunc(func)` wraps a plain `func(min_, max_)`.
- `TimeTicks(ticker, format, time)` relabels the major ticks as timestamps:
  - `ticker` defaults to `DefaultTicks()`.
  - `format` is a `strftime` pattern. By default, RFC 3339 text is used.
  - `time` converts Unix seconds to a datetime. It defaults to `utc_unix_time`. Use `unix_time_in(tz)` for another time zone.

### Scales

- `LinearScale`
- `LogScale`, which raises `ValueError` for non-positive values.
- `InvertedScale(normalizer)`

### Formatting

`format_float_tick(v, prec)` formats `v` with `prec` decimals (at least one), then trims trailing zeros and a trailing point.

## Comparing rendered images

```python
from tickplot.imagecmp import equal, diff, golden_path

equal("svg", got_bytes, want_bytes)     # byte equality (also "tex")
equal("eps", got_bytes, want_bytes)     # line by line, ignoring CreationDate lines
equal("pdf", got_bytes, want_bytes)     # ignores CreationDate/ModDate entries
equal("png", got_bytes, want_bytes)     # decoded pixel equality (also jpeg, jpg, tiff)
golden_path("testdata/plot.png")        # "testdata/plot_golden.png"
```

`equal` raises `ValueError` for an unknown type, for data that cannot be decoded, or for malformed PDF data.

`diff(a, b)` takes two Pillow images and returns `(image, box)`:

- `image` is an RGBA image the size of their union, holding an intensity-scaled difference.
- `box` is the `(left, top, right, bottom)` box of the compared intersection.

## What this package does not do

- It does not draw plots. It has no canvas, plot, legend or plotter types.
- `Axis` holds only a range, scale and tick settings. It does not lay out or render axis lines or labels.
- The image helpers compare images that are already encoded. They do not render examples, do not regenerate golden files, and have no command-line tool.