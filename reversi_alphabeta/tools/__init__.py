"""Command line tools: perft, self-play and diagnostics"""
