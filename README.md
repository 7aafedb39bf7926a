# airwaynav

This package works with chest CT data and airway surfaces. It has no GUI.

- `airwaynav.ctvolume` reads Analyze 7.5 images into a `CTVolume`. An image
  is a `.hdr` header plus `.img` data, big-endian, with 8-bit unsigned or
  16-bit signed voxels. The header is parsed by `read_header` into an
  `AnalyzeHeader`. Any other voxel depth raises `UnsupportedDepthError`.
  `CTVolume` provides:
  - voxel lookup with `voxel(x, y, z)`, which returns -1 when the point is
    out of bounds;
  - `is_in_bounds`;
  - `volume_physical_dims`;
  - `volume_data` and `flat_data`;
  - the axial, coronal and sagittal aspect ratios.

  `image_path_for_header` gives the `.img` path that belongs with a header.
- `airwaynav.airway_tree` reads a legacy VTK POLYDATA file into an
  `AirwayTree`, through `read_vtk_polydata` or `AirwayTree.from_file`. Both
  ASCII and big-endian BINARY files are read. It provides:
  - `mean_location`;
  - the averaged per-vertex normals, from `vertex_normals`;
  - the interleaved `(n, 6)` array of `x, y, z, nx, ny, nz`, from
    `interleaved_vertices`.
- `airwaynav.camera` provides `Camera6DoF`, a fly-through camera. It has:
  - mouse rotation and mouse translation;
  - scroll zoom, limited to 1–45 degrees;
  - keyboard steps in the `CameraMovement` directions;
  - a `view_matrix`;
  - a `camera_parameters` readout of `(x, y, z, roll, pitch, yaw)`.

  The module also has the helpers `look_at` and `rotation_matrix_to_angles`.
- `airwaynav.slice_view` provides `OrthoSliceView`. It handles the pan, the
  wheel zoom, the reset and the orthographic `projection` of a slice view.
  `select_location` maps a clicked pixel to a voxel location. Also in the
  module:
  - `window_parameters`, which gives the level/width presets for each
    `WindowType`;
  - `ortho`, which builds the projection matrix.
- `airwaynav.slicers` provides three linked slice selectors: `AxialSlicer`,
  `CoronalSlicer` and `AxialSlab`. Each one keeps a clamped slice index and
  steps through slices with the `Key.W` and `Key.S` keys. It follows
  selections made in other views. Each one has three lists of plain-callable
  listeners:
  - `slice_listeners`, for selected locations;
  - `voxel_listeners`, for `VoxelInfo`;
  - `clear_listeners`, for clearing.
- `airwaynav.zoom` provides `ViewScale` and `ImagePairView`. These hold the
  zoom-in, zoom-out, normal-size and fit-to-window logic for an image shown
  beside its processed copy. The scale is kept between 0.333 and 3.
- `airwaynav.logger` writes a log file with lines of the form
  `dd-mm-yyyy hh:mm:ss | level | line | file | function | message`. Call
  `initialize(path)` to start it and `clean()` to stop it.
  `FileLogHandler` is a plain `logging.Handler`.
- `airwaynav.glerrors` turns sequences of OpenGL error codes (`GLError`) into
  readable reports with `collect_errors`, `format_errors` and `error_report`.

## Install

```
pip install .
```

## Command line

```
airwaynav --image path/to/scan.hdr
```

This loads the Analyze image. The `.img` file next to the header is found
automatically. The command then prints:

- the volume's dimensions, voxel size and gray range;
- the display sizes the axial, coronal, sagittal and oblique views would
  take at a width of 300.

Add an airway surface to get its vertex count, its polygon count and its
mean location:

```
airwaynav --image path/to/scan.hdr --surface path/to/airway.vtk
```

At least one of `--image` or `--surface` is required. Messages are logged to
`Application.log`. Use `--log` to choose another file. If a file cannot be
loaded, the command prints the error and exits with status 1.

## Library use

```python
from airwaynav.ctvolume import CTVolume, image_path_for_header
from airwaynav.slicers import AxialSlicer

volume = CTVolume("scan.hdr", image_path_for_header("scan.hdr"))
print(volume.axial_aspect_ratio())

axial = AxialSlicer(volume)
axial.set_slice(40)
print(axial.voxel_info((120.0, 80.0)))
```

```python
from airwaynav.camera import Camera6DoF, CameraMovement

camera = Camera6DoF()
camera.up_rotation(-90.0)
camera.process_keyboard_translation(CameraMovement.FORWARD)
print(camera.camera_parameters())
```

## What it does not do

The package computes view state, geometry and voxel values only. It does not:

- draw anything;
- open a window;
- create graphics textures, shaders or buffers;
- load ordinary picture files for the image-pair views.

The slicers, camera and zoom classes hold the state that a display would use.
Connecting them to a screen is left to the caller.

## Tests

```
pip install .[test]
pytest
```