"""Service layer: result envelope, type registry, settings values, transfer.

Services take an explicit :class:`~podshell.infrastructure.store.TableStore`
and never render anything; shell commands and the CLI consume their output.
"""
