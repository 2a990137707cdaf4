"""Tests for coefficient loading, scaling and validation."""

import json
import logging
from pathlib import Path

import h5py
import numpy as np
import pytest

from hydroloads.coefficients import (
    HydroCoefficientStore,
    load_coefficients,
    set_reader,
    DEFAULT_DATASET_PATHS,
)
from hydroloads.coefficients.reader_npz import NpzReader
from hydroloads.errors import FileError, FormatError, IndexWarning

from conftest import BODY, DT, G, RHO, STEPS, make_datasets, make_store, write_h5, write_npz

PREFIX = f"{BODY}/hydro_coeffs"
K_PATH = f"{PREFIX}/radiation_damping/impulse_response_fun/K"
T_PATH = f"{PREFIX}/radiation_damping/impulse_response_fun/t"


class TestScaling:

    def test_restoring_scaled_by_rho_g(self, store, datasets):
        raw = datasets[f"{PREFIX}/linear_restoring_stiffness"]
        np.testing.assert_allclose(store.restoring_stiffness, raw * RHO * G)

    def test_added_mass_scaled_on_read(self, store, datasets):
        raw = datasets[f"{PREFIX}/added_mass/inf_freq"]
        np.testing.assert_allclose(store.raw_added_mass, raw)
        np.testing.assert_allclose(store.added_mass, raw * RHO)
        # Reading twice does not compound the scaling
        np.testing.assert_allclose(store.added_mass, raw * RHO)

    def test_kernel_element_scaled_by_rho(self, store, datasets):
        raw = datasets[K_PATH]
        for row, col, step in [(0, 0, 0), (2, 4, 3), (5, 5, STEPS - 1), (3, 1, 7)]:
            assert store.kernel(row, col, step) == pytest.approx(raw[row, col, step] * RHO)

    def test_whole_kernel_scaled_by_rho(self, store, datasets):
        np.testing.assert_allclose(store.impulse_response, datasets[K_PATH] * RHO)

    def test_scalars_and_vectors(self, store):
        assert store.rho == RHO
        assert store.g == G
        assert store.displaced_volume == pytest.approx(0.5)
        np.testing.assert_allclose(store.center_of_gravity, [0.0, 0.0, -2.0])
        np.testing.assert_allclose(store.center_of_buoyancy, [0.0, 0.0, -2.5])


class TestKernelBounds:

    @pytest.mark.parametrize("index", [
        (-1, 0, 0), (0, -1, 0), (0, 0, -1),
        (6, 0, 0), (0, 6, 0), (0, 0, STEPS),
    ])
    def test_out_of_range_is_zero_with_warning(self, store, index):
        with pytest.warns(IndexWarning):
            assert store.kernel(*index) == 0.0

    def test_out_of_range_is_logged(self, store, caplog):
        with caplog.at_level(logging.WARNING, logger="hydroloads.errors"):
            with pytest.warns(IndexWarning):
                store.kernel(0, 0, STEPS + 5)
        assert "out of range" in caplog.text


class TestDimensions:

    def test_dimensions_match_raw_file(self, h5_path):
        with h5py.File(h5_path, 'r') as f:
            n = f[f"{PREFIX}/linear_restoring_stiffness"].shape[0]
            s = f[K_PATH].shape[2]
            t = f[T_PATH][()]
        store = load_coefficients(h5_path, BODY)
        assert store.dof_count == n
        assert store.step_count == s
        assert len(store.time_samples) == s
        assert store.timestep == pytest.approx(t[1] - t[0])

    def test_timestep_uses_first_two_samples(self):
        times = np.array([0.0, 0.05, 0.2, 0.4])
        store = make_store(kernel=np.zeros((6, 6, 4)), times=times)
        assert store.timestep == pytest.approx(0.05)

    def test_npz_matches_h5(self, store, npz_path):
        npz_store = load_coefficients(npz_path, BODY)
        np.testing.assert_allclose(npz_store.restoring_stiffness, store.restoring_stiffness)
        np.testing.assert_allclose(npz_store.impulse_response, store.impulse_response)
        assert npz_store.step_count == store.step_count
        assert npz_store.rho == store.rho

    def test_alternate_vector_shapes(self):
        store = HydroCoefficientStore(
            restoring_stiffness=np.eye(6),
            added_mass=np.eye(6),
            impulse_response=np.zeros((6, 6, 3)),
            time_samples=np.array([[0.0], [0.1], [0.2]]),
            center_of_gravity=np.array([[1.0], [2.0], [3.0]]),
            center_of_buoyancy=np.array([[1.0, 2.0, 2.5]]),
            displaced_volume=np.array([[2.0]]),
            rho=np.array([1025.0]),
            g=9.81,
        )
        np.testing.assert_allclose(store.center_of_gravity, [1.0, 2.0, 3.0])
        np.testing.assert_allclose(store.center_of_buoyancy, [1.0, 2.0, 2.5])
        assert store.step_count == 3
        assert store.rho == 1025.0


class TestReadOnly:

    def test_arrays_cannot_be_written(self, store):
        with pytest.raises(ValueError):
            store.restoring_stiffness[0, 0] = 1.0
        with pytest.raises(ValueError):
            store.time_samples[0] = 1.0
        with pytest.raises(ValueError):
            store.center_of_gravity[2] = 0.0

    def test_input_arrays_are_copied(self):
        kernel = np.zeros((6, 6, STEPS))
        store = make_store(kernel=kernel, rho=1.0)
        kernel[0, 0, 0] = 5.0
        assert store.kernel(0, 0, 0) == 0.0


class TestFormatErrors:

    def _write(self, tmp_path, datasets):
        return write_h5(tmp_path / "broken.h5", datasets)

    @pytest.mark.parametrize("missing", [
        K_PATH,
        T_PATH,
        f"{BODY}/properties/cg",
        f"{BODY}/properties/disp_vol",
        "simulation_parameters/rho",
        "simulation_parameters/g",
    ])
    def test_missing_dataset(self, tmp_path, missing):
        datasets = make_datasets()
        del datasets[missing]
        path = self._write(tmp_path, datasets)
        with pytest.raises(FormatError, match=missing):
            load_coefficients(path, BODY)

    def test_unknown_body(self, h5_path):
        with pytest.raises(FormatError, match="body7"):
            load_coefficients(h5_path, "body7")

    def test_kernel_dims_disagree_with_restoring(self, tmp_path):
        datasets = make_datasets()
        datasets[K_PATH] = np.zeros((5, 6, STEPS))
        with pytest.raises(FormatError, match="impulse_response"):
            load_coefficients(self._write(tmp_path, datasets), BODY)

    def test_kernel_rank(self, tmp_path):
        datasets = make_datasets()
        datasets[K_PATH] = np.zeros((6, 6))
        with pytest.raises(FormatError, match="3-dimensional"):
            load_coefficients(self._write(tmp_path, datasets), BODY)

    def test_time_samples_length_mismatch(self, tmp_path):
        datasets = make_datasets()
        datasets[T_PATH] = np.arange(STEPS + 1) * DT
        with pytest.raises(FormatError, match="time_samples"):
            load_coefficients(self._write(tmp_path, datasets), BODY)

    def test_time_samples_not_increasing(self):
        times = np.arange(STEPS) * DT
        times[4] = times[3]
        with pytest.raises(FormatError, match="increasing"):
            make_store(times=times)

    def test_single_time_sample(self):
        with pytest.raises(FormatError, match="two"):
            make_store(kernel=np.zeros((6, 6, 1)), times=np.array([0.0]))

    def test_restoring_not_square(self, tmp_path):
        datasets = make_datasets()
        datasets[f"{PREFIX}/linear_restoring_stiffness"] = np.zeros((6, 5))
        with pytest.raises(FormatError, match="square"):
            load_coefficients(self._write(tmp_path, datasets), BODY)

    def test_wrong_dof_count(self):
        with pytest.raises(FormatError, match="6 x 6"):
            HydroCoefficientStore(np.eye(3), np.eye(3), np.zeros((3, 3, 4)), np.arange(4.0),
                                  (0, 0, 0), (0, 0, 0), 1.0, RHO, G)

    def test_added_mass_shape(self, tmp_path):
        datasets = make_datasets()
        datasets[f"{PREFIX}/added_mass/inf_freq"] = np.eye(5)
        with pytest.raises(FormatError, match="added_mass"):
            load_coefficients(self._write(tmp_path, datasets), BODY)

    def test_scalar_with_many_values(self, tmp_path):
        datasets = make_datasets()
        datasets["simulation_parameters/rho"] = np.array([1000.0, 1025.0])
        with pytest.raises(FormatError, match="rho"):
            load_coefficients(self._write(tmp_path, datasets), BODY)

    def test_center_of_gravity_length(self, tmp_path):
        datasets = make_datasets()
        datasets[f"{BODY}/properties/cg"] = np.zeros(4)
        with pytest.raises(FormatError, match="center_of_gravity"):
            load_coefficients(self._write(tmp_path, datasets), BODY)

    def test_group_where_dataset_expected(self, tmp_path):
        datasets = make_datasets()
        del datasets[f"{BODY}/properties/disp_vol"]
        datasets[f"{BODY}/properties/disp_vol/value"] = np.array([0.5])
        with pytest.raises(FormatError, match="disp_vol"):
            load_coefficients(self._write(tmp_path, datasets), BODY)

    @pytest.mark.parametrize("writer, suffix", [(write_h5, ".h5"), (write_npz, ".npz")])
    def test_non_numeric_dataset(self, tmp_path, writer, suffix):
        datasets = make_datasets()
        datasets[f"{BODY}/properties/disp_vol"] = np.array(b"half")
        path = writer(tmp_path / f"text{suffix}", datasets)
        with pytest.raises(FormatError, match="not numeric"):
            load_coefficients(path, BODY)


class TestFileErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileError):
            load_coefficients(str(tmp_path / "absent.h5"), BODY)

    def test_not_an_hdf5_file(self, tmp_path):
        path = tmp_path / "garbage.h5"
        path.write_text("not hdf5")
        with pytest.raises(FileError):
            load_coefficients(str(path), BODY)

    def test_truncated_npz(self, tmp_path, npz_path):
        data = Path(npz_path).read_bytes()
        path = tmp_path / "truncated.npz"
        path.write_bytes(data[: len(data) // 2])
        with pytest.raises(FileError):
            load_coefficients(str(path), BODY)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "coefficients.csv"
        path.write_text("1,2,3")
        with pytest.raises(FileError, match="csv"):
            load_coefficients(str(path), BODY)


class TestConfiguration:

    def test_dataset_path_override(self, tmp_path):
        datasets = make_datasets()
        datasets["env/density"] = datasets.pop("simulation_parameters/rho")
        path = write_h5(tmp_path / "custom.h5", datasets)
        store = load_coefficients(path, BODY, dataset_paths={'rho': "env/density"})
        assert store.rho == RHO

    def test_unknown_override_field(self, h5_path):
        with pytest.raises(ValueError, match="viscosity"):
            load_coefficients(h5_path, BODY, dataset_paths={'viscosity': "x"})

    def test_default_paths_cover_every_field(self):
        assert set(DEFAULT_DATASET_PATHS) == {
            'restoring_stiffness', 'added_mass', 'impulse_response', 'time_samples',
            'center_of_gravity', 'center_of_buoyancy', 'displaced_volume', 'rho', 'g',
        }

    def test_set_reader_overrides_extension(self, tmp_path, datasets):
        path = tmp_path / "coefficients.bin"
        with open(path, 'wb') as f:
            np.savez(f, **datasets)
        set_reader(NpzReader())
        store = load_coefficients(str(path), BODY)
        assert store.step_count == STEPS

    def test_load_classmethod(self, h5_path):
        store = HydroCoefficientStore.load(h5_path, BODY)
        assert store.body == BODY


def test_summary_is_json_serialisable(store):
    summary = store.summary()
    assert json.loads(json.dumps(summary))['step_count'] == STEPS
    assert summary['dof_count'] == 6
    assert summary['timestep_s'] == pytest.approx(DT)
