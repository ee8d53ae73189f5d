from typing import Any


def dummy_attributed_object_from_dict(properties: dict[str, Any]):
    """Stand in for a saved model instance, exposing each of *properties* as an attribute."""

    class Object(object):
        pass

    attr_obj = Object()
    for k, v in properties.items():
        attr_obj.__setattr__(k, v)

    return attr_obj
