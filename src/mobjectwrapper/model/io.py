"""
Input/Output Manager (HDF5)
Handles saving and loading the SceneState to .h5 files.
"""
import json
import logging
from importlib.metadata import version, PackageNotFoundError

import h5py
import numpy as np

from mobjectwrapper.config import JSON_ATTR_LIMIT
from mobjectwrapper.model.mobject import Mobject
from mobjectwrapper.model.state import SceneState
from mobjectwrapper.rendering import PrimitiveData, VectorizedData, render

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("mobjectwrapper")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

class IOManager:

    @staticmethod
    def save_scene(state: SceneState, filepath: str) -> None:
        logger.info(f"Saving scene to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION
                f.attrs["scene_name"] = state.scene_name

                # The whole mobject tree, payloads included, as one JSON document
                tree_json = json.dumps([mob.to_dict() for mob in state.mobjects])

                # Use dataset if data exceeds HDF5 attribute size limit (64KB)
                if len(tree_json) > JSON_ATTR_LIMIT:
                    logger.info(f"Mobject tree is large ({len(tree_json)} bytes), using dataset")
                    f.create_dataset("mobjects", data=np.void(tree_json.encode('utf-8')))
                else:
                    f.attrs["mobjects_json"] = tree_json

            state.filepath = filepath
            logger.info(f"Scene saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save scene: {e}")
            raise e

    @staticmethod
    def load_scene(state: SceneState, filepath: str) -> None:
        logger.info(f"Loading scene from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        try:
            with h5py.File(filepath, "r") as f:
                # reset the state to clear existing data
                state.reset()

                if "scene_name" in f.attrs:
                    state.scene_name = str(f.attrs["scene_name"])

                tree_json = None
                if "mobjects" in f:
                    # Large data stored as dataset
                    tree_json = bytes(f["mobjects"][()]).decode('utf-8')
                elif "mobjects_json" in f.attrs:
                    # Small data stored as attribute
                    tree_json = f.attrs["mobjects_json"]
                    if isinstance(tree_json, bytes):
                        tree_json = tree_json.decode('utf-8')

                if tree_json:
                    state.add(*(Mobject.from_dict(d) for d in json.loads(tree_json)))
                    logger.debug(f"Loaded {len(state.mobjects)} top-level mobject(s).")
                else:
                    logger.warning("Scene file contains no mobjects.")

            state.filepath = filepath
            logger.info(f"Scene loaded from: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to load scene: {e}")
            raise e

    # ---- EXPORT HELPERS ----
    @staticmethod
    def export_render_data(state: SceneState, filepath: str) -> int:
        """
        Renders every mobject with its own material and writes the arrays.
        One group per rendered item, named by position and uid.

        Returns:
            The number of exported items.
        """
        logger.info(f"Exporting render data to: {filepath}")
        try:
            items = [item for mob in state.mobjects for item in render(mob)]
            with h5py.File(filepath, "w") as f:
                f.attrs["version"] = APP_VERSION
                f.attrs["scene_name"] = state.scene_name

                for i, item in enumerate(items):
                    grp = f.create_group(f"{i:04d}_{item.uid}")
                    grp.attrs["name"] = item.name
                    grp.attrs["kind"] = item.kind.value
                    grp.attrs["material"] = item.material.value
                    grp.attrs["style"] = json.dumps(item.style.to_dict())

                    if isinstance(item, VectorizedData):
                        grp.attrs["closed"] = item.closed
                        IOManager._write_array(grp, "curves", item.curves)
                    elif isinstance(item, PrimitiveData):
                        IOManager._write_array(grp, "vertices", item.vertices)
                        IOManager._write_array(grp, "triangles", item.triangles)
                        IOManager._write_array(grp, "lines", item.lines)

            logger.info(f"Export complete: {len(items)} item(s).")
            return len(items)

        except Exception as e:
            logger.exception("Failed to export render data")
            raise e

    @staticmethod
    def _write_array(grp: h5py.Group, name: str, data: np.ndarray) -> None:
        # Empty arrays cannot be chunked, so they are stored uncompressed
        if data.size:
            grp.create_dataset(name, data=data, compression="gzip")
        else:
            grp.create_dataset(name, data=data)
