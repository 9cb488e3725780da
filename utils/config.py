import copy

import yaml

DEFAULT_CONFIG = {
    'data': {
        'image_width': 28,
        'image_height': 28,
        'block_radius': 2,
    },
    'model': {
        'path': 'converted_model.tflite',
    },
}

def load_config(config_path):
    """Load and validate configuration"""
    with open(config_path) as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError(f"Configuration must be a mapping: {config_path}")

    required_keys = {
        'data': ['image_width', 'image_height', 'block_radius'],
        'model': ['path']
    }

    for section, keys in required_keys.items():
        if section not in config:
            raise ValueError(f"Missing configuration section: {section}")
        if not isinstance(config[section], dict):
            raise ValueError(f"Configuration section must be a mapping: {section}")
        for key in keys:
            if key not in config[section]:
                raise ValueError(f"Missing configuration key: {section}.{key}")
    return config

def default_config():
    return copy.deepcopy(DEFAULT_CONFIG)
