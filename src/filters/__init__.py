"""Triggered-alerts filter engine.

Modules
───────
  dimensions  - table of filterable alert fields
  reducer     - pure FilterState state machine
  projector   - FilterState → RemoteQuery
  post_filter - client-side exclusions + display order
  summarizer  - FilterState → removable "applied filter" chips
  persistence - per-view snapshot save/restore
  actions     - bound action callbacks
  engine      - ties the above to an alert source
  cli         - argparse entry-point
"""
