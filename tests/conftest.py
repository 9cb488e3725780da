import os

os.environ.setdefault('MPLBACKEND', 'Agg')

import numpy as np
import pytest

from dataset_generator import BLOCK_RADIUS, IMAGE_HEIGHT, IMAGE_WIDTH


def block_centre(profile):
    """Recover the centre index of a possibly clipped block from its 1-D profile"""
    occupied = np.flatnonzero(profile)
    first, last = occupied[0], occupied[-1]
    if last < len(profile) - 1:
        return last - BLOCK_RADIUS
    return first + BLOCK_RADIUS


class FakeInterpreter:
    """Stands in for tf.lite.Interpreter; answers with the block centre as (row, col)"""
    def __init__(self, input_shape=(1, IMAGE_HEIGHT * IMAGE_WIDTH)):
        self.input_shape = np.array(input_shape, dtype=np.int32)
        self.allocated = False
        self.inputs = []
        self.invocations = 0
        self._output = None

    def allocate_tensors(self):
        self.allocated = True

    def get_input_details(self):
        return [{'name': 'pixels', 'index': 0, 'shape': self.input_shape, 'dtype': np.float32}]

    def get_output_details(self):
        return [{'name': 'centre', 'index': 7, 'shape': np.array([1, 2], dtype=np.int32), 'dtype': np.float32}]

    def set_tensor(self, index, value):
        assert index == 0
        assert value.dtype == np.float32
        assert tuple(value.shape) == tuple(self.input_shape)
        self.inputs.append(value.copy())

    def invoke(self):
        grid = self.inputs[-1].reshape(IMAGE_HEIGHT, IMAGE_WIDTH)
        row = block_centre(grid.max(axis=1))
        col = block_centre(grid.max(axis=0))
        self._output = np.array([[row, col]], dtype=np.float32)
        self.invocations += 1

    def get_tensor(self, index):
        assert index == 7
        return self._output


@pytest.fixture
def fake_interpreter():
    return FakeInterpreter()


@pytest.fixture
def make_fake_interpreter():
    return FakeInterpreter


@pytest.fixture(scope="session")
def centre_model_path(tmp_path_factory):
    """A real .tflite model that predicts the block centre as (row, col)"""
    tf = pytest.importorskip("tensorflow")

    def centre_index(profile, size):
        first = tf.argmax(profile, output_type=tf.int32)
        last = size - 1 - tf.argmax(tf.reverse(profile, axis=[0]), output_type=tf.int32)
        centre = tf.where(last < size - 1, last - BLOCK_RADIUS, first + BLOCK_RADIUS)
        return tf.cast(centre, tf.float32)

    @tf.function(input_signature=[tf.TensorSpec([1, IMAGE_HEIGHT * IMAGE_WIDTH], tf.float32)])
    def centre(pixels):
        grid = tf.reshape(pixels, [IMAGE_HEIGHT, IMAGE_WIDTH])
        row = centre_index(tf.reduce_max(grid, axis=1), IMAGE_HEIGHT)
        col = centre_index(tf.reduce_max(grid, axis=0), IMAGE_WIDTH)
        return tf.reshape(tf.stack([row, col]), [1, 2])

    module = tf.Module()
    module.centre = centre
    converter = tf.lite.TFLiteConverter.from_concrete_functions(
        [centre.get_concrete_function()], module)
    model_path = tmp_path_factory.mktemp("model") / "converted_model.tflite"
    model_path.write_bytes(converter.convert())
    return model_path
