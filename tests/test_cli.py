import os

from mobjectwrapper.main import build_demo_scene, main
from mobjectwrapper.model.kinds import MobjectKind


def test_demo_scene_changes_kinds():
    state = build_demo_scene()
    kinds = {mob.name: mob.kind for mob in state.all_mobjects()}
    assert kinds["shapes"] == MobjectKind.GROUP
    assert kinds["square"] == MobjectKind.RECTANGLE
    assert kinds["circle"] == MobjectKind.ELLIPSE
    assert kinds["arc"] == MobjectKind.PATH
    assert kinds["disc"] == MobjectKind.CIRCLE


def test_demo_then_info(tmp_path, capsys):
    path = str(tmp_path / "demo.h5")
    assert main(["demo", path]) == 0
    assert os.path.exists(path)

    assert main(["info", path]) == 0
    out = capsys.readouterr().out
    assert "Scene: Kind changes" in out
    assert "square [rectangle] Rectangle(width=4.000, height=2.000)" in out
    assert "  circle [ellipse]" in out


def test_export_command(tmp_path, capsys):
    scene = str(tmp_path / "demo.h5")
    out = str(tmp_path / "render.h5")
    main(["demo", scene])

    assert main(["export", scene, out]) == 0
    assert os.path.exists(out)
    assert "Exported 4 item(s)" in capsys.readouterr().out


def test_missing_file_is_handled(tmp_path, capsys):
    assert main(["info", str(tmp_path / "missing.h5")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_preview_command_overrides_material(tmp_path, monkeypatch):
    import matplotlib.pyplot as plt
    from mobjectwrapper.rendering import PrimitiveData, preview

    scene = str(tmp_path / "demo.h5")
    main(["demo", scene])

    shown = []
    plotted = []
    original = preview.plot_render_data

    def recording_plot(items, **kwargs):
        plotted.extend(items)
        return original(items, **kwargs)

    monkeypatch.setattr(plt, "show", lambda *a, **k: shown.append(True))
    monkeypatch.setattr(preview, "plot_render_data", recording_plot)
    try:
        assert main(["preview", scene, "--material", "primitive"]) == 0
    finally:
        plt.close("all")

    assert shown
    assert len(plotted) == 4
    assert all(isinstance(item, PrimitiveData) for item in plotted)
