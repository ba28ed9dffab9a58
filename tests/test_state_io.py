import h5py
import numpy as np
import pytest

from mobjectwrapper.model.io import IOManager
from mobjectwrapper.model.kinds import MobjectKind
from mobjectwrapper.model.material import Material, Style
from mobjectwrapper.model.mobject import Mobject
from mobjectwrapper.model.state import SceneState


@pytest.fixture
def scene(square, circle) -> SceneState:
    square.stretch(2.0, dim=0)
    circle.material = Material.PRIMITIVE
    circle.style = Style(fill_color="#00FF00", fill_opacity=0.5)
    state = SceneState(scene_name="test scene")
    state.add(Mobject(name="group", submobjects=[square, circle]), Mobject.line((0, 0), (1, 1), name="line"))
    return state


def test_scene_lookup(scene, square):
    assert scene.get(square.uid) is square
    assert scene.find("line")[0].kind == MobjectKind.LINE
    assert [m.name for m in scene.all_mobjects()] == ["group", "square", "circle", "line"]
    with pytest.raises(KeyError):
        scene.get("missing")


def test_scene_rejects_duplicates(scene, square):
    with pytest.raises(ValueError):
        scene.add(square)


def test_scene_remove_and_reset(scene):
    line = scene.find("line")[0]
    scene.remove(line)
    assert scene.find("line") == []
    scene.reset()
    assert scene.mobjects == []
    assert scene.scene_name == "Untitled Scene"


def test_save_and_load_round_trip(tmp_path, scene, square):
    path = str(tmp_path / "scene.h5")
    IOManager.save_scene(scene, path)
    assert scene.filepath == path

    loaded = SceneState(scene_name="other")
    loaded.add(Mobject.dot(name="stale"))
    IOManager.load_scene(loaded, path)

    assert loaded.scene_name == "test scene"
    assert loaded.find("stale") == []
    restored = loaded.get(square.uid)
    assert restored.kind == MobjectKind.RECTANGLE
    assert restored.data == square.data
    circle = loaded.find("circle")[0]
    assert circle.material == Material.PRIMITIVE
    assert circle.style.fill_color == "#00FF00"


def test_large_scene_is_stored_as_dataset(tmp_path):
    curves = np.random.default_rng(0).random((1500, 4, 3))
    state = SceneState()
    state.add(Mobject.path(curves, name="noise"))
    path = str(tmp_path / "large.h5")

    IOManager.save_scene(state, path)
    with h5py.File(path, "r") as f:
        assert "mobjects" in f
        assert "mobjects_json" not in f.attrs

    loaded = SceneState()
    IOManager.load_scene(loaded, path)
    np.testing.assert_allclose(loaded.find("noise")[0].data.points, curves)


def test_load_rejects_non_hdf5(tmp_path):
    path = tmp_path / "not_a_scene.h5"
    path.write_text("hello")
    with pytest.raises(ValueError):
        IOManager.load_scene(SceneState(), str(path))


def test_export_render_data(tmp_path, scene):
    path = str(tmp_path / "render.h5")
    count = IOManager.export_render_data(scene, path)
    assert count == 3

    with h5py.File(path, "r") as f:
        groups = sorted(f.keys())
        assert len(groups) == 3
        rectangle, circle, line = (f[g] for g in groups)

        assert rectangle.attrs["kind"] == "rectangle"
        assert rectangle.attrs["material"] == "vectorized"
        assert rectangle["curves"].shape == (4, 4, 3)

        assert circle.attrs["kind"] == "circle"
        assert circle.attrs["material"] == "primitive"
        assert circle["triangles"].shape[1] == 3

        assert line["curves"].shape == (1, 4, 3)
        assert not line.attrs["closed"]
