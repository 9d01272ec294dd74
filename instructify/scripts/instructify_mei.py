# Copyright 2022 The Magenta Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""Expands the ornaments of MEI files into explicit notes.

Currently supports MEI files with the extensions .mei and .xml. Each file is
written with the same relative path below the output directory.

Example usage:
  $ instructify_mei \
    --input_dir=/path/to/input/dir \
    --output_dir=/path/to/output/dir \
    --recursive \
    --log=INFO
"""

import os

from absl import app
from absl import flags
from absl import logging
from instructify.common import statistics
from instructify.mei import mei_element
from instructify.mei import mei_io
from instructify.mei import pitch_lib
from instructify.ornaments import chain_resolver
from instructify.ornaments import configs
from instructify.ornaments import instructifier as instructifier_lib

FLAGS = flags.FLAGS

flags.DEFINE_string('input_dir', None,
                    'Directory containing MEI files to instructify.')
flags.DEFINE_string('input_file', None,
                    'A single MEI file to instructify. Used if --input_dir is '
                    'not given.')
flags.DEFINE_string('output_dir', None,
                    'Directory the instructified files are written to. '
                    'Existing files will be overwritten.')
flags.DEFINE_bool('recursive', False,
                  'Whether or not to recurse into subdirectories.')
flags.DEFINE_string('config', 'default',
                    'The name of the configuration to use, one of %s.' %
                    ', '.join(sorted(configs.CONFIG_MAP)))
flags.DEFINE_string('catalog_path', None,
                    'Path to an ornament catalog replacing the one of the '
                    'configuration.')
flags.DEFINE_integer('note_duration', None,
                     'Duration of the synthesized notes, e.g. 32 for 32nd '
                     'notes. Overrides the value of the configuration.')
flags.DEFINE_string('log', 'INFO',
                    'The threshold for what messages will be logged '
                    'DEBUG, INFO, WARNING, ERROR, or FATAL.')

MEI_EXTENSIONS = ('.mei', '.xml')

# Per-file failures that are logged before the next file is processed.
INSTRUCTIFY_ERRORS = (
    mei_io.MeiParseException,
    mei_element.MalformedAttributeException,
    pitch_lib.PitchParseException,
    chain_resolver.MalformedChainError,
    IOError,
)


def instructify_file(instructifier, input_path, output_path):
  """Instructifies one MEI file.

  Args:
    instructifier: The `Instructifier` to use.
    input_path: Path of the MEI file to read.
    output_path: Path the instructified document is written to.

  Returns:
    True if the file was written, False if it could not be instructified.
  """
  try:
    document = mei_io.parse_mei_file(input_path)
    instructifier.run(document)
    output_dir = os.path.dirname(output_path)
    if output_dir and not os.path.isdir(output_dir):
      os.makedirs(output_dir)
    document.write(output_path)
  except INSTRUCTIFY_ERRORS as e:
    logging.error(
        'Could not instructify MEI file %s. It will be skipped. Error was: %s',
        input_path, e)
    return False
  logging.info('Instructified MEI file %s.', input_path)
  return True


def instructify_files(instructifier, root_dir, sub_dir, output_dir,
                      recursive=False):
  """Instructifies the MEI files of a directory.

  Args:
    instructifier: The `Instructifier` to use.
    root_dir: A string specifying a root directory.
    sub_dir: A string specifying a path to a directory under `root_dir` in which
        to instructify contents.
    output_dir: The directory the files are written to, mirroring the
        structure below `root_dir`.
    recursive: A boolean specifying whether or not recursively instructify
        files contained in subdirectories of the specified directory.

  Returns:
    The number of files written.
  """
  dir_to_convert = os.path.join(root_dir, sub_dir)
  logging.info("Instructifying files in '%s'.", dir_to_convert)
  recurse_sub_dirs = []
  written_count = 0
  for file_in_dir in sorted(os.listdir(dir_to_convert)):
    full_file_path = os.path.join(dir_to_convert, file_in_dir)
    if full_file_path.lower().endswith(MEI_EXTENSIONS):
      output_path = os.path.join(output_dir, sub_dir, file_in_dir)
      if instructify_file(instructifier, full_file_path, output_path):
        written_count += 1
    elif recursive and os.path.isdir(full_file_path):
      recurse_sub_dirs.append(os.path.join(sub_dir, file_in_dir))
    else:
      logging.warning('Skipping file %s, it is not an MEI file.',
                      full_file_path)

  for recurse_sub_dir in recurse_sub_dirs:
    written_count += instructify_files(
        instructifier, root_dir, recurse_sub_dir, output_dir, recursive)
  return written_count


def build_config():
  """Returns the configuration selected and modified by the flags."""
  if FLAGS.config not in configs.CONFIG_MAP:
    raise app.UsageError('Unknown config: %s' % FLAGS.config)
  config = configs.CONFIG_MAP[FLAGS.config]
  overrides = {}
  if FLAGS.catalog_path:
    overrides['catalog_path'] = os.path.expanduser(FLAGS.catalog_path)
  if FLAGS.note_duration is not None:
    overrides['note_duration'] = FLAGS.note_duration
  return configs.update_config(config, overrides)


def main(unused_argv):
  logging.set_verbosity(FLAGS.log)

  if not FLAGS.input_dir and not FLAGS.input_file:
    raise app.UsageError('--input_dir or --input_file required')
  if not FLAGS.output_dir:
    raise app.UsageError('--output_dir required')

  instructifier = instructifier_lib.Instructifier(build_config())
  output_dir = os.path.expanduser(FLAGS.output_dir)

  if FLAGS.input_dir:
    written_count = instructify_files(
        instructifier, os.path.expanduser(FLAGS.input_dir), '', output_dir,
        FLAGS.recursive)
  else:
    input_file = os.path.expanduser(FLAGS.input_file)
    written_count = int(instructify_file(
        instructifier, input_file,
        os.path.join(output_dir, os.path.basename(input_file))))
  logging.info('Wrote %d instructified files to %s.', written_count,
               output_dir)
  statistics.log_statistics_list(instructifier.total_statistics)


def console_entry_point():
  app.run(main)


if __name__ == '__main__':
  console_entry_point()
