# Copyright 2012-2021 The Meson development team

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
import sys
import shutil
import argparse
import traceback
import typing as T

from . import mlog, msetup
from .mesonlib import MesonException

class CommandLineParser:
    def __init__(self) -> None:
        self.term_width = shutil.get_terminal_size().columns
        self.formatter = lambda prog: argparse.HelpFormatter(prog, max_help_position=int(self.term_width / 2), width=self.term_width)
        self.parser = argparse.ArgumentParser(prog='picomeson', formatter_class=self.formatter,
                                              description='A minimal Meson build description interpreter')
        msetup.add_arguments(self.parser)
        self.parser.set_defaults(run_func=msetup.run)

    def parse_args(self, args: T.List[str]) -> argparse.Namespace:
        return self.parser.parse_args(args)

    def run(self, args: T.List[str]) -> int:
        options = self.parse_args(args)
        try:
            return options.run_func(options)
        except MesonException as e:
            mlog.exception(e)
            logfile = mlog.shutdown()
            if logfile is not None:
                mlog.log("\nA full log can be found at", mlog.bold(logfile))
            if os.environ.get('MESON_FORCE_BACKTRACE'):
                raise
            return 1
        except Exception:
            if os.environ.get('MESON_FORCE_BACKTRACE'):
                raise
            traceback.print_exc()
            return 1
        finally:
            mlog.shutdown()

def run(original_args: T.List[str]) -> int:
    mlog.setup_console()
    return CommandLineParser().run(original_args[:])

def main() -> int:
    return run(sys.argv[1:])

if __name__ == '__main__':
    sys.exit(main())
