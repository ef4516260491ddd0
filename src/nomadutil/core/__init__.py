"""Core services: release acquisition, verification and installation."""
