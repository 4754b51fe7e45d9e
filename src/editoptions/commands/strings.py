CMD_TOGGLE_LINE_NUMBERS = "Line Numbers"
CMD_TOGGLE_ACTIVE_LINE = "Highlight Active Line"
CMD_TOGGLE_WORD_WRAP = "Word Wrap"
CMD_TOGGLE_CLOSE_BRACKETS = "Auto Close Braces"
