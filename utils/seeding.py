import os
import random
import numpy as np


def set_global_seeds(seed):
    """
    Set seeds so synthetic workloads sleep for the same durations on every run.

    Args:
        seed (int): Random seed
    """
    os.environ["PYTHONHASHSEED"] = str(seed)
    np.random.seed(seed)
    random.seed(seed)
