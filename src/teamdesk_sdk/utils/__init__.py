# Copyright (c) TeamDesk SDK contributors.
# Licensed under the MIT license.
