"""Configuration package for the assessment pipeline.

Provides a configuration system with support for:
- Multiple configuration sources (defaults, JSON file, environment, CLI)
- Hierarchical configuration with proper precedence
- Type-safe configuration objects with validation
- Simplified access through facade pattern

Main components:
- config.py: Core configuration dataclasses and loader
- service.py: Facade for simplified configuration access
"""
