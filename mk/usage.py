"""Help text printed by ``mk --help``."""

USAGE = """\
Usage: mk [options] [file|-]

Open files in Marked or stream content from STDIN.

Arguments:
  file              Path to markdown file to open in Marked
  -                 Read from STDIN and open streaming preview (default if no file specified)

Options:
  -h, --help        Show this help message
  -v, --version     Show version information
  -s, --stream      Open streaming preview window
  --verbose         Show debug logging on stderr
  --refresh [file|all]  Refresh preview(s). With no argument, refreshes frontmost window.
                       With "all", refreshes all windows. With a file path, refreshes matching window.
  --pref [page]     Open Marked preferences. With no argument, opens to General page.
                   With a page name, opens to that specific settings page.
  --dingus          Open Markdown Dingus
  --paste           Create new document from clipboard
  --raise           Raise window after opening (use with file argument)
  --preview TEXT    Preview text directly in a new document
  --extract URL     Extract content from URL and open in Marked
  --stylestealer    Open Style Stealer HUD (optionally with URL)
  --importurl       Open Import URL window (optionally with URL)
  --style NAME      Set preview style for open windows
  --add-style FILE  Add a CSS file as a custom style to Marked
  --defaults KEY=VALUE [KEY=VALUE...]  Set user preferences (multiple pairs allowed)
  --dojs SCRIPT [FILE]  Run JavaScript command in document(s). Optional FILE
                       targets specific document(s) or "all" for all documents.

Configuration:
  Settings are read from $MK_CONFIG or ~/.config/mk/config.yaml when present.

Examples:
  mk file.md                    Open file.md in Marked
  echo "# Hello" | mk           Stream from STDIN
  mk -                          Stream from STDIN (explicit)
  mk --stream                   Open streaming preview
  mk --refresh                  Refresh frontmost preview
  mk --refresh all              Refresh all previews
  mk --pref                     Open preferences
  mk --dingus                   Open Markdown Dingus
  mk --preview "Hello **world**" Preview text directly
  mk --extract https://example.com Extract and preview URL
  mk --add-style ~/Styles/custom.css Add custom style
  mk --defaults syntaxHighlight=1 includeMathJax=0 Set preferences
  mk --dojs "window.scrollTo(0,0)" Run JavaScript in frontmost window
  mk --dojs "alert('Hello')" all Run JavaScript in all windows
"""
