# This file is part of the MapView project.
# Copyright (C) 2024 Omniscale <http://omniscale.de>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import yaml

class YAMLError(Exception):
    pass

def load_yaml_file(file_or_filename):
    """
    Load yaml from file object or filename.
    """
    if isinstance(file_or_filename, str):
        try:
            with open(file_or_filename, 'rb') as f:
                return load_yaml(f)
        except IOError as ex:
            raise YAMLError('unable to read %s: %s' % (file_or_filename, ex))
    return load_yaml(file_or_filename)

def load_yaml(doc):
    """
    Load yaml from file object or string.

    >>> load_yaml('cache: {pool_size: 4}')
    {'cache': {'pool_size': 4}}
    """
    try:
        data = yaml.safe_load(doc)
    except yaml.YAMLError as ex:
        raise YAMLError(str(ex))
    if data is None:
        return {}
    if type(data) is not dict:
        # all configs are dicts
        raise YAMLError("configuration not a YAML dictionary")
    return data
