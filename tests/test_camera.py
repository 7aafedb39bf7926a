import numpy as np
import pytest

from airwaynav.camera import (
    PITCHCOORD,
    ROLLCOORD,
    XCOORD,
    YAWCOORD,
    ZCOORD,
    Camera6DoF,
    CameraMovement,
    look_at,
    rotation_matrix_to_angles,
)


def _orthonormal(camera):
    basis = camera.rotation_matrix()
    return np.allclose(basis.T @ basis, np.identity(3))


def test_default_axes_are_perpendicular():
    camera = Camera6DoF()
    assert camera.check_camera_vectors() is True
    assert _orthonormal(camera)


def test_check_camera_vectors_detects_skew():
    camera = Camera6DoF()
    camera.front = np.array([1.0, 1.0, 0.0])
    assert camera.check_camera_vectors() is False


def test_view_matrix_rows_are_camera_axes():
    camera = Camera6DoF()
    view = camera.view_matrix()
    assert np.allclose(view[0, :3], camera.right)
    assert np.allclose(view[1, :3], camera.up)
    assert np.allclose(view[2, :3], -camera.front)


def test_look_at_maps_eye_to_origin_and_center_ahead():
    eye = np.array([1.0, 2.0, 3.0])
    center = np.array([4.0, 6.0, 3.0])
    view = look_at(eye, center, [0.0, 0.0, 1.0])
    eye_cam = view @ np.append(eye, 1.0)
    center_cam = view @ np.append(center, 1.0)
    assert np.allclose(eye_cam[:3], 0.0)
    distance = np.linalg.norm(center - eye)
    assert np.allclose(center_cam[:3], [0.0, 0.0, -distance])


def test_rotation_matrix_columns():
    camera = Camera6DoF()
    camera.up_rotation(30.0)
    rot = camera.rotation_matrix()
    assert np.allclose(rot[:, 0], camera.front)
    assert np.allclose(rot[:, 1], camera.up)
    assert np.allclose(rot[:, 2], camera.right)


def test_angles_of_identity_are_zero():
    assert rotation_matrix_to_angles(np.identity(3)) == pytest.approx((0.0, 0.0, 0.0))


def test_angles_gimbal_case():
    rot = np.array([[0.0, 0.0, -1.0], [0.0, 1.0, 0.0], [1.0, 0.0, 0.0]])
    yaw, pitch, roll = rotation_matrix_to_angles(rot)
    assert yaw == 0.0
    assert pitch == pytest.approx(90.0)
    assert roll == pytest.approx(0.0)


def test_camera_parameters_reports_position():
    camera = Camera6DoF(position=[1.5, -2.0, 3.0])
    params = camera.camera_parameters()
    assert len(params) == 6
    assert (params[XCOORD], params[ZCOORD]) == (1.5, 3.0)
    assert all(np.isfinite([params[ROLLCOORD], params[PITCHCOORD], params[YAWCOORD]]))


def test_front_rotation_keeps_front():
    camera = Camera6DoF()
    front = camera.front.copy()
    camera.front_rotation(37.0)
    assert np.allclose(camera.front, front)
    assert _orthonormal(camera)


def test_up_rotation_quarter_turn():
    camera = Camera6DoF()
    old_front = camera.front.copy()
    old_up = camera.up.copy()
    camera.up_rotation(-90.0)
    assert np.allclose(camera.up, old_up)
    assert abs(camera.front @ old_front) < 1e-9
    assert _orthonormal(camera)


def test_rotation_round_trip():
    camera = Camera6DoF()
    camera.right_rotation(25.0)
    camera.right_rotation(-25.0)
    reference = Camera6DoF()
    assert np.allclose(camera.front, reference.front)
    assert np.allclose(camera.up, reference.up)


def test_mouse_rotation_uses_sensitivity():
    moved = Camera6DoF()
    moved.process_mouse_rotation(20.0, 0.0, False)
    direct = Camera6DoF()
    direct.up_rotation(20.0 * direct.mouse_sensitivity)
    assert np.allclose(moved.front, direct.front)


def test_mouse_rotation_with_shift_rolls_about_front():
    camera = Camera6DoF()
    front = camera.front.copy()
    camera.process_mouse_rotation(40.0, 15.0, True)
    assert np.allclose(camera.front, front)


def test_mouse_translation_without_shift():
    camera = Camera6DoF()
    camera.process_mouse_translation(4.0, 2.0, False)
    expected = camera.right * 4.0 * camera.mouse_movement_speed + camera.up * 2.0 * camera.mouse_movement_speed
    assert np.allclose(camera.model_offset, expected)


def test_mouse_translation_with_shift():
    camera = Camera6DoF()
    camera.process_mouse_translation(4.0, 2.0, True)
    assert np.allclose(camera.model_offset, camera.front * 4.0 * camera.mouse_movement_speed)


def test_keyboard_forward_moves_along_front():
    camera = Camera6DoF()
    camera.process_keyboard_translation(CameraMovement.FORWARD)
    assert np.allclose(camera.model_offset, camera.front * camera.keyboard_movement_speed)


def test_keyboard_left_moves_along_right():
    camera = Camera6DoF()
    camera.process_keyboard_translation(CameraMovement.LEFT)
    assert np.allclose(camera.model_offset, camera.right * camera.keyboard_movement_speed)


def test_keyboard_opposites_cancel():
    camera = Camera6DoF()
    camera.up_rotation(12.0)
    for direction in CameraMovement:
        camera.process_keyboard_translation(direction)
    assert np.allclose(camera.model_offset, 0.0)


def test_scroll_changes_zoom():
    camera = Camera6DoF()
    start = camera.zoom
    camera.process_mouse_scroll(5.0)
    assert camera.zoom == start - 5.0


def test_scroll_clamps_zoom():
    camera = Camera6DoF()
    camera.process_mouse_scroll(-100.0)
    assert camera.zoom == 45.0
    camera.process_mouse_scroll(100.0)
    assert camera.zoom == 1.0


def test_set_default_restores_state():
    camera = Camera6DoF()
    camera.up_rotation(-90.0)
    camera.model_offset = np.array([2.0, 55.0, -150.0])
    camera.mouse_sensitivity = 0.04
    camera.set_default()
    reference = Camera6DoF()
    assert np.allclose(camera.front, reference.front)
    assert np.allclose(camera.model_offset, reference.model_offset)
    assert camera.mouse_sensitivity == reference.mouse_sensitivity