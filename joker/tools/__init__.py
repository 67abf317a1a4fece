from .equity_tool import EquityEstimate, EquityTool

__all__ = ["EquityTool", "EquityEstimate"]
