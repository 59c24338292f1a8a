from .construct import construct_phase
from .evaluate import evaluate_phase
from .initialize import initialize_phase
from .update import update_phase

__all__ = ['construct_phase', 'evaluate_phase', 'initialize_phase', 'update_phase']
