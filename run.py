"""
Entry Point Script (Bootstrap)
==============================
The file to run from the host application's "Run script" action.

Why is this file needed?
------------------------
1. It is located outside the 'src' package so the host can execute it
   directly without the package being installed.
2. It modifies 'sys.path' to ensure Python can resolve imports like
   'from beamoffsets.commands ...' without errors.

Running it fixes all beam offsets once. Afterwards the console commands
(fix_beam_offsets, fix_beam, analyze_beams) are importable from
beamoffsets.commands.
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from beamoffsets.main import main

if __name__ == "__main__":
    # The host passes its own argv; the load-time run takes no options
    main([])
