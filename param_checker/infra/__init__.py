"""宿主框架集成."""
