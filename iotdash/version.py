"""
Created on 2026-10-12

@author: wf
"""
from dataclasses import dataclass

import iotdash


@dataclass
class Version:
    """
    Version handling for iotdash
    """

    name = "iotdash"
    version = iotdash.__version__
    date = "2026-10-12"
    updated = "2026-10-18"
    description = "IoT sensor dashboard showing the recent readings of a device"

    authors = "Wolfgang Fahl"

    chat_url = "https://github.com/WolfgangFahl/iotdash/discussions"
    doc_url = "https://github.com/WolfgangFahl/iotdash"
    cm_url = "https://github.com/WolfgangFahl/iotdash"

    license = """Copyright 2026 contributors. All rights reserved.

  Licensed under the Apache License 2.0
  http://www.apache.org/licenses/LICENSE-2.0

  Distributed on an "AS IS" basis without warranties
  or conditions of any kind, either express or implied."""

    longDescription = f"""{name} version {version}
{description}

  Created by {authors} on {date} last updated {updated}"""
