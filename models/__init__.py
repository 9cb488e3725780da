from .tflite_regressor import (
    CoordRegressor,
    InterpreterBuildError,
    ModelLoadError,
    RegressorError,
)
