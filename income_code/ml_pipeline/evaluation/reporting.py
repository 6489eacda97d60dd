from pathlib import Path
from typing import Iterable

from matplotlib import pyplot as plt
import seaborn as sns

from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER
from income_code.ml_pipeline.evaluation.objects import ConfusionMatrix, RocPoint


def finish_plot(fig, save_path: Path = None, logger: MyLogger = DEF_NOTEBOOK_LOGGER):
    if save_path is not None:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, bbox_inches="tight")
        logger.log_result(f"Saved plot: {save_path}")
        plt.close(fig)
    else:
        plt.show()


def display_ROC_curve(
    roc_points: Iterable[RocPoint],
    roc_auc: float = None,
    save_path: Path = None,
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
):
    logger.log_check("Displaying ROC curve...")
    roc_points = list(roc_points)
    fpr = [p.false_positive_rate for p in roc_points]
    tpr = [p.true_positive_rate for p in roc_points]

    label = "Model" if roc_auc is None else f"Model (AUC = {roc_auc:.3f})"

    fig, ax = plt.subplots(figsize=(7, 6))
    ax.plot(fpr, tpr, label=label)
    ax.plot([0, 1], [0, 1], linestyle="--", label="Random classifier")

    ax.set_xlabel("False Positive Rate")
    ax.set_ylabel("True Positive Rate")
    ax.set_title("ROC Curve")
    ax.legend()

    finish_plot(fig, save_path=save_path, logger=logger)
    logger.log_result("Displayed successfully.")
    return fig


def display_confusion_matrix(
    cm: ConfusionMatrix,
    save_path: Path = None,
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
):
    logger.log_check("Displaying confusion matrix...")

    fig, ax = plt.subplots(figsize=(6, 5))
    sns.heatmap(cm.to_frame(margins=False), annot=True, fmt="d", cmap="Blues", cbar=False, ax=ax)
    ax.set_xlabel("Predicted income > 50K")
    ax.set_ylabel("Actual income > 50K")
    ax.set_title("Confusion Matrix")

    finish_plot(fig, save_path=save_path, logger=logger)
    logger.log_result("Displayed successfully.")
    return fig
