# nwpemu

`nwpemu` stands in for a numerical weather prediction model. It produces
synthetic gridded fields one model step at a time. Use it to build and test
tools that consume model output when no real model run is available.

You describe the emulated model in a YAML file. The file sets:

- the grid identifier,
- the number of steps,
- the number of vertical levels,
- the fields the model offers.

For each field you say how its values are generated. Five generator
functions are available, in `nwpemu.generators`:

| Name            | Function              | What it produces                                            |
|-----------------|-----------------------|-------------------------------------------------------------|
| `vortex_rollup` | `apply_vortex_rollup` | A vortex roll-up pattern at time `time_variation * step`     |
| `random`        | `apply_random`        | Random values from a `uniform`, `normal` or `bernoulli` distribution |
| `step`          | `apply_step`          | `value + variation * step`, optionally only on a random share of points |
| `sinc`          | `apply_cardinal_sine` | A sum of randomly placed cardinal-sine blobs scaled into `[min, max]` |
| `gaussian`      | `apply_gaussian`      | A sum of randomly placed Gaussian blobs scaled into `[min, max]` |

Any generator can be limited to a rectangular focus area. A `translation`
moves that area by `translation * step` at every step.

## Installation

```
pip install nwpemu
```

## Configuration

```yaml
emulator:
  grid_identifier: N80
  n_steps: 2
  vertical_levels: 5
  area: [72.0, -25.0, 34.0, 45.0]     # optional default area: [N lat, W lon, S lat, E lon]
  fields:
    100u:
      levtype: sfc                    # surface field: a single level
      apply:
        vortex_rollup:
          time_variation: 1.1
    u:
      apply:
        levels:
          "1":
            sinc:
              modes: 3
              min: -1.0
              max: 10.0
          "2":
            random:
              distribution: uniform
              min: 1.0
              max: 2.0
          "3,4":
            step:
              value: 10.0
              variation: 1.0
              area: [72.0, -25.0, 34.0, 45.0]
              translation: [0.0, 1.0]
          "5:":
            gaussian:
              modes: 2
              max_stddev: 20.0
              min: 1.0
              max: 2.0
    v: u                              # reuse the configuration of field "u"
```

When `n_steps` is missing, 100 steps are run; when `vertical_levels` is
missing, the model has a single level. Fields with a `levtype` are surface
fields and give one parameter, `<name>,sfc,0`. The others are model-level
fields and give one parameter per vertical level, `<name>,ml,<level>`.

Level keys under `levels` can take these forms:

- a single level: `"3"`
- a sequence: `"1,2,5"`
- a closed range: `"2:4"`
- an open range: `":3"` or `"4:"`

Each level can be covered by one key at most, and every level must lie in
`[1, vertical_levels]`. A level that no key covers is filled with zeros.
`levels` cannot be used by surface fields or when the model has a single
level.

Areas use the form `[north_lat, west_lon, south_lat, east_lon]`. Latitudes
must lie in [-90, 90], longitudes in [-180, 180], and the north latitude must
not be below the south latitude.

The configuration is checked when the reader is built. An invalid
configuration raises `nwpemu.reader.ConfigError`, and the message says what is
wrong.

## Command line

```
nwpemu --config-src=emulator.yml
nwpemu --config-src=emulator.yml --seed=42
```

This reads and validates the configuration, builds the grid and runs the
emulator through every configured step, logging each completed step.
`--seed` seeds the random generator so that a run can be repeated. Exactly one
of `--config-src` and `--grib-src` must be given; `--grib-src` is accepted by
the parser but reported as an unsupported source. The command returns 0 on
success and 1 on a usage or configuration error.

## Grids

The grid identifier names a Gaussian grid: `N<n>` and `F<n>` are served on the
full Gaussian grid with `4n` longitudes on each of `2n` latitudes; `O<n>` is
the octahedral grid. Any other identifier is rejected. A caller can also pass
its own `(n, 2)` array of lon/lat points to the provider.

## Library use

```python
import numpy as np
from nwpemu.area import FocusArea, validate_area
from nwpemu.provider import DataSourceType, NWPDataProvider

validate_area([72.0, -25.0, 34.0, 45.0])        # True

europe = FocusArea(155.0, 225.0, 34.5, 71.5)     # west, east, south, north
europe.contains(187.10, 50.73)                   # True

provider = NWPDataProvider(DataSourceType.CONFIG, "emulator.yml",
                           rng=np.random.default_rng(0))
while provider.get_step_data():
    u = provider.fields["u"]                     # shape (points, levels)
```

- `nwpemu.config_reader.ConfigReader` reads the configuration. After
  `set_reader_area(lonlat)` it returns one `Message` (`short_name`, `levtype`,
  `level`, `data`) per parameter from `next_message()`, then `None` at the end
  of each step, until `done()` reports that the last step has been generated.
- `nwpemu.provider.NWPDataProvider` sits on top of the reader. It keeps one
  float64 array per field in `fields`, with a level axis ordered surface
  first, then model levels, then other level types alphabetically
  (`sort_level_types`, `find_level_index`). Each `get_step_data()` call
  refreshes all arrays and returns `False` once every step has been provided;
  `step` gives the number of completed steps.
- `nwpemu.levels` resolves and validates level keys, and `nwpemu.validation`
  checks a configuration and the options of each generator.

## What it does not do

- It does not read GRIB files: configuration files are the only data source.
- It does not load or run plugins that consume the fields; using the fields at
  each step is left to the calling code.
- It runs in a single process; fields are not partitioned or distributed.