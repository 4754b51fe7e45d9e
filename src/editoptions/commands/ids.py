TOGGLE_LINE_NUMBERS = "view.toggleLineNumbers"
TOGGLE_ACTIVE_LINE = "view.toggleActiveLine"
TOGGLE_WORD_WRAP = "view.toggleWordWrap"
TOGGLE_CLOSE_BRACKETS = "view.toggleCloseBrackets"
