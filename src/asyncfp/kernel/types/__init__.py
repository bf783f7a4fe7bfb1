"""Kernel types – public re-export surface.

Modules:
  result.py – Result carrier threaded through a step chain
  steps.py  – StepChain, run_steps, run_in_try, Deferred
  try_.py   – Try
  option.py – Option
"""

from asyncfp.kernel.types.option import Option
from asyncfp.kernel.types.result import Result
from asyncfp.kernel.types.steps import Deferred, Step, StepChain, run_in_try, run_steps
from asyncfp.kernel.types.try_ import Try

__all__ = [
    "Deferred",
    "Option",
    "Result",
    "Step",
    "StepChain",
    "Try",
    "run_in_try",
    "run_steps",
]
