import sys
import runpy

# debuggers pass the real arguments after "--"
if "--" in sys.argv:
    args = sys.argv[sys.argv.index("--") + 1 :]
else:
    args = sys.argv[1:]

sys.argv = ["pyunspecd"] + args

# same as: python -m pyunspecd ...
runpy.run_module("pyunspecd", run_name="__main__")
