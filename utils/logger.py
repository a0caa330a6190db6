import os
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from utils.config import load_env_config

CSV_COLUMNS = ['depth', 'label', 'elapsed', 'is_scope', 'color', 'share']


class Logger:
    """
    Prints profiler reports to stdout and optionally keeps their rows for CSV export.

    Args:
        run_name (str): Unique identifier for the run. Defaults to current timestamp.
        runs_root (str): Root directory for CSV files. Defaults to $TIMESTATS_RUNS_DIR or 'runs'.
        save_csv (bool): Whether to keep report rows and write them to CSV. Defaults to False.
        config (dict): Configuration dictionary to print. Defaults to None.
    """
    def __init__(
        self,
        run_name: Optional[str] = None,
        runs_root: Optional[str] = None,
        save_csv: bool = False,
        config: Optional[Dict[str, Any]] = None,
    ):
        # resolve the root once per instantiation
        if runs_root is None:
            runs_root = load_env_config()["runs_root"]
        if run_name is None:
            run_name = datetime.now().strftime("%Y-%m-%d_%H%M%S")

        self.run_name = run_name
        self.dir_name = os.path.join(runs_root, run_name)
        self.save_csv = save_csv
        self._rows: List[Dict[str, Any]] = []  # accumulated report rows for CSV logging

        if self.save_csv:
            os.makedirs(self.dir_name, exist_ok=True)

        if config is not None:
            self.log_hyperparameters(config)

    def log_hyperparameters(self, hyperparams: dict):
        """Pretty print the effective configuration in a table format."""
        hyper_param_space, value_space = 30, 40
        format_str = "| {:<" + f"{hyper_param_space}" + "} | {:<" + f"{value_space}" + "}|"
        hbar = "-" * (hyper_param_space + value_space + 6)

        print(hbar)
        print(format_str.format("Setting", "Value"))
        print(hbar)

        for key, value in hyperparams.items():
            print(format_str.format(truncate_str(str(key), hyper_param_space),
                                    truncate_str(str(value), value_space)))

        print(hbar)

    def log_report(self, profiler, width: Optional[int] = None, color: bool = True):
        """Print the profiler's table and a short summary; keep rows if CSV logging is on."""
        print(profiler.render_table(width=width, color=color))
        pprint({
            'total_elapsed': f"{profiler.elapsed():f}s",
            'open_scopes': profiler.depth,
        })
        if self.save_csv:
            self.log_rows(profiler.collect_rows())

    def log_rows(self, rows):
        """Store report rows for the CSV export."""
        for row in rows:
            self._rows.append({
                'depth': row.depth,
                'label': row.label,
                'elapsed': row.elapsed,
                'is_scope': row.is_scope,
                'color': row.color,
                'share': row.share_display,
            })

    def save2csv(self, file_name: Optional[str] = None):
        """Save logged rows to a CSV file."""
        if not self.save_csv or not self._rows:
            return

        if file_name is None:
            file_name = os.path.join(self.dir_name, "report.csv")

        df = pd.DataFrame(self._rows, columns=CSV_COLUMNS)
        df.to_csv(file_name, index=False)

    def close(self):
        """Flush pending rows to CSV."""
        if self.save_csv:
            self.save2csv()


def pprint(dict_data):
    """Pretty print values in a table format."""
    key_space, val_space = 40, 40
    border = "-" * (key_space + val_space + 5)
    row_fmt = f"| {{:<{key_space}}} | {{:<{val_space}}}|"

    print(f"\n{border}")
    for k, v in dict_data.items():
        k_str = truncate_str(str(k), key_space)
        v_str = truncate_str(str(v), val_space)
        print(row_fmt.format(k_str, v_str))
    print(f"{border}\n")


def truncate_str(s: str, max_len: int) -> str:
    """Truncate string with ellipsis if exceeds max length."""
    return s if len(s) <= max_len else s[:max_len-3] + "..."
