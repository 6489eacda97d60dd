from pathlib import Path

import pandas as pd

from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER


def load_df(df_file_path: Path, logger: MyLogger = DEF_NOTEBOOK_LOGGER):
    df_file_path = Path(df_file_path)
    logger.log_check(f"Loading the dataset from {df_file_path.absolute()}...", print_to_console=True)

    if not df_file_path.exists():
        err_msg = f"Dataset file not found: {df_file_path}"
        logger.logger.error(err_msg)
        raise FileNotFoundError(err_msg)

    df = pd.read_csv(df_file_path, skipinitialspace=True)
    logger.log_result(f"Loaded dataframe with {len(df)} rows and {len(df.columns)} columns\n", print_to_console=True)

    return df
