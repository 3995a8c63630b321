"""Text differencing: edits, merging, line alignment and unified diffs."""