"""
keyed-reducers CLI

Commands:
- keyed-reducers check - Shape-validate a reducer mapping
- keyed-reducers replay - Replay a JSON-lines action file through a combined reducer
- keyed-reducers version - Show version information
"""
