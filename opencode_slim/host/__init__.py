"""Host application collaborators.

All knowledge of where the host keeps its configuration, and how that
configuration is read and written, lives behind the HostConfigManager
interface. The installer core only consumes StepResults.
"""
