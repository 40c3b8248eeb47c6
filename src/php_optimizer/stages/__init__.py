"""Per-directory processing stages."""

from .image_optimization import ImageOptimizationStage
from .quality_pipeline import QualityPipelineStage, QualityTools
from .script_formatting import ScriptFormattingStage
from .syntax_check import SyntaxChecker

__all__ = [
	"ImageOptimizationStage",
	"QualityPipelineStage",
	"QualityTools",
	"ScriptFormattingStage",
	"SyntaxChecker",
]
