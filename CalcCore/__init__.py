"""Scientific calculator core: checked numeric library, expression evaluator and session state."""
