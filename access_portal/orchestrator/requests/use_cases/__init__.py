# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
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

"""Access request use cases."""

from .apply_changes import ApplyChangesUseCase
from .create_request import CreateRequestUseCase
from .query_requests import QueryRequestsUseCase

__all__ = ["CreateRequestUseCase", "ApplyChangesUseCase", "QueryRequestsUseCase"]
