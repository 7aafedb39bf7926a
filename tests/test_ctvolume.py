import struct
from pathlib import Path

import numpy as np
import pytest

from airwaynav.ctvolume import (
    AnalyzeHeader,
    CTVolume,
    UnsupportedDepthError,
    image_path_for_header,
    read_header,
    read_image,
)


def make_header(path, *, depth=16, columns=3, rows=3, slices=2,
                deltas=(1.0, 1.0, 1.0), gray_max=1000, gray_min=-1024):
    data = bytearray(348)
    struct.pack_into(">H", data, 0x48, depth)
    struct.pack_into(">3H", data, 42, columns, rows, slices)
    struct.pack_into(">3f", data, 80, *deltas)
    struct.pack_into(">i", data, 140, gray_max)
    struct.pack_into(">i", data, 144, gray_min)
    Path(path).write_bytes(bytes(data))
    return path


def write_volume(tmp_path, values, depth=16, **kwargs):
    hdr = make_header(tmp_path / "vol.hdr", depth=depth, **kwargs)
    fmt = ">%dh" % len(values) if depth == 16 else "%dB" % len(values)
    (tmp_path / "vol.img").write_bytes(struct.pack(fmt, *values))
    return hdr


def test_read_header_fields(tmp_path):
    hdr = make_header(tmp_path / "a.hdr", depth=16, columns=5, rows=4, slices=3,
                      deltas=(0.5, 0.75, 2.0), gray_max=3071, gray_min=-1024)
    header = read_header(hdr)
    assert header == AnalyzeHeader(16, 5, 4, 3, 0.5, 0.75, 2.0, 3071, -1024)
    assert header.slice_size == 20
    assert header.num_voxels == 60


def test_short_header_raises(tmp_path):
    path = tmp_path / "short.hdr"
    path.write_bytes(b"\x00" * 50)
    with pytest.raises(ValueError):
        read_header(path)


def test_image_path_for_header():
    assert image_path_for_header("data/scan.hdr") == str(Path("data/scan.img"))


def test_read_16bit_signed(tmp_path):
    values = list(range(-9, 9))
    hdr = write_volume(tmp_path, values)
    data = read_image(tmp_path / "vol.img", read_header(hdr))
    assert data.dtype == np.float32
    assert data.tolist() == [float(v) for v in values]


def test_read_8bit_unsigned(tmp_path):
    values = [0, 1, 200, 255, 7, 9, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21]
    hdr = write_volume(tmp_path, values, depth=8)
    data = read_image(tmp_path / "vol.img", read_header(hdr))
    assert data.tolist() == [float(v) for v in values]


def test_short_image_pads_zeros(tmp_path):
    hdr = make_header(tmp_path / "vol.hdr", depth=16)
    (tmp_path / "vol.img").write_bytes(struct.pack(">2h", 5, -6))
    data = read_image(tmp_path / "vol.img", read_header(hdr))
    assert data[:2].tolist() == [5.0, -6.0]
    assert not data[2:].any()
    assert data.size == 18


@pytest.mark.parametrize("depth", [32, 64, 12])
def test_unsupported_depth(tmp_path, depth):
    hdr = make_header(tmp_path / "vol.hdr", depth=depth)
    (tmp_path / "vol.img").write_bytes(b"\x00" * 100)
    with pytest.raises(UnsupportedDepthError):
        read_image(tmp_path / "vol.img", read_header(hdr))


def test_volume_default_image_path_and_voxels(tmp_path):
    values = list(range(18))
    hdr = write_volume(tmp_path, values)
    volume = CTVolume(hdr)
    assert volume.image_filename == str(tmp_path / "vol.img")
    assert volume.num_columns == 3 and volume.num_rows == 3 and volume.num_slices == 2
    assert volume.gray_max == 1000 and volume.gray_min == -1024
    assert volume.voxel(2, 1, 1) == float(values[2 + 3 * 1 + 9 * 1])
    assert volume.voxel(0, 0, 0) == 0.0


def test_voxel_out_of_bounds_is_minus_one(tmp_path):
    volume = CTVolume(write_volume(tmp_path, list(range(18))))
    assert volume.voxel(-1, 0, 0) == -1.0
    assert volume.voxel(0, 0, 2) == -1.0
    assert volume.voxel(3, 0, 0) == -1.0
    assert volume.is_in_bounds(2, 2, 1)


def test_volume_data_matches_voxels(tmp_path):
    volume = CTVolume(write_volume(tmp_path, list(range(18))))
    cube = volume.volume_data()
    assert cube.shape == (3, 3, 2)
    for i in range(3):
        for j in range(3):
            for k in range(2):
                assert cube[i, j, k] == volume.voxel(i, j, k)


def test_flat_data_is_copy(tmp_path):
    volume = CTVolume(write_volume(tmp_path, list(range(18))))
    flat = volume.flat_data()
    flat[0] = 999.0
    assert volume.voxel(0, 0, 0) == 0.0


def test_aspect_ratios_and_dims(tmp_path):
    hdr = write_volume(tmp_path, [0] * 24, columns=4, rows=2, slices=3)
    volume = CTVolume(hdr, tmp_path / "vol.img")
    assert volume.axial_aspect_ratio() == pytest.approx(2.0)
    assert volume.coronal_aspect_ratio() / volume.sagittal_aspect_ratio() == pytest.approx(
        volume.axial_aspect_ratio()
    )
    assert volume.volume_physical_dims() == (2.0, 4.0, 3.0)


def test_empty_volume_raises():
    with pytest.raises(ValueError):
        CTVolume().axial_aspect_ratio()