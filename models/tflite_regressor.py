import numpy as np
import tensorflow as tf
from tensorflow.lite.tools import flatbuffer_utils

# FlatBuffer file identifier of TensorFlow Lite models, stored at byte offset 4
TFLITE_FILE_IDENTIFIER = b"TFL3"


class RegressorError(Exception):
    """Base class for fatal model setup failures"""


class ModelLoadError(RegressorError):
    def __init__(self, model_path, reason=None):
        self.model_path = model_path
        self.reason = reason
        message = f"Failed to load the model: {model_path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InterpreterBuildError(RegressorError):
    def __init__(self, reason=None):
        self.reason = reason
        super().__init__("Failed to create interpreter.")


def load_model(model_path):
    """Read a serialized TFLite model and check that its flatbuffer parses"""
    try:
        with open(model_path, 'rb') as f:
            model_content = f.read()
    except OSError as e:
        raise ModelLoadError(model_path, e.strerror) from e

    if model_content[4:8] != TFLITE_FILE_IDENTIFIER:
        raise ModelLoadError(model_path, "not a TensorFlow Lite flatbuffer")

    # Garbage offsets fail in assorted ways inside the flatbuffer reader
    try:
        model = flatbuffer_utils.read_model_from_bytearray(bytearray(model_content))
    except Exception as e:
        raise ModelLoadError(model_path, "corrupt TensorFlow Lite flatbuffer") from e
    if not model.subgraphs:
        raise ModelLoadError(model_path, "model has no subgraphs")
    return model_content


def build_interpreter(model_content):
    """Build an interpreter over the builtin op set"""
    try:
        return tf.lite.Interpreter(
            model_content=model_content,
            experimental_op_resolver_type=tf.lite.experimental.OpResolverType.BUILTIN
        )
    except (ValueError, RuntimeError) as e:
        raise InterpreterBuildError(str(e)) from e


class CoordRegressor:
    """Runs a single-input, single-output coordinate regressor

    The model's output stores the coordinate as (y, x): index 1 is the
    predicted x and index 0 the predicted y.
    """
    def __init__(self, interpreter):
        self.interpreter = interpreter
        self.interpreter.allocate_tensors()
        # Only the first input and output tensors are used
        self.input_details = self.interpreter.get_input_details()[0]
        self.output_details = self.interpreter.get_output_details()[0]

    @classmethod
    def from_file(cls, model_path):
        return cls(build_interpreter(load_model(model_path)))

    def preprocess(self, image):
        """Lay the raster out in the input tensor's declared shape"""
        return np.asarray(image, dtype=np.float32).reshape(self.input_details['shape'])

    def predict(self, image):
        """Run one forward pass, returns (x, y)"""
        self.interpreter.set_tensor(self.input_details['index'], self.preprocess(image))
        self.interpreter.invoke()
        output = self.interpreter.get_tensor(self.output_details['index']).reshape(-1)
        return float(output[1]), float(output[0])
