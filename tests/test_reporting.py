from matplotlib import pyplot as plt

from income_code.ml_pipeline.evaluation.metrics import confusion_matrix_at
from income_code.ml_pipeline.evaluation.reporting import display_confusion_matrix, display_ROC_curve
from income_code.ml_pipeline.evaluation.roc import roc_curve


def test_roc_plot_is_saved(four_records, tmp_path, logger):
    path = tmp_path / "plots" / "roc.png"

    fig = display_ROC_curve(roc_curve(four_records), roc_auc=1.0, save_path=path, logger=logger)

    assert path.exists()
    labels = [line.get_label() for line in fig.axes[0].get_lines()]
    assert labels == ["Model (AUC = 1.000)", "Random classifier"]


def test_confusion_matrix_plot_is_saved(four_records, tmp_path, logger):
    path = tmp_path / "cm.png"

    fig = display_confusion_matrix(confusion_matrix_at(four_records), save_path=path, logger=logger)

    assert path.exists()
    annotations = sorted(text.get_text() for text in fig.axes[0].texts)
    assert annotations == ["0", "1", "1", "2"]
    plt.close("all")
