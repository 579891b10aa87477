"""View-side application core.

- `state.view_state.ViewStateStore`: the single authoritative view record
- `dispatcher.EventDispatcher`: routes host events to state merges and view renders
- `error_hook`: forwards uncaught exceptions and log records to the host
"""
