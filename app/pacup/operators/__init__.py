"""Installers for the selected upgrade targets.

This module exports the operator classes.
"""

from pacup.operators.aur import AurHelperOperator
from pacup.operators.base import InstallResult, Operator
from pacup.operators.pacman import PacmanOperator

__all__ = ["AurHelperOperator", "InstallResult", "Operator", "PacmanOperator"]
