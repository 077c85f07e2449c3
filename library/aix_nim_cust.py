#!/usr/bin/python
#
# Copyright 2016, International Business Machines Corporation
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

######################################################################
"""AIX NIM: customize nim clients to the level of an lpp_source"""

import re
import subprocess
import threading
import logging
from collections import OrderedDict

from ansible.module_utils.basic import AnsibleModule


DOCUMENTATION = """
---
module: aix_nim_cust
author: "Alain Poncet, Patrice Jacquin"
version_added: "1.0.0"
short_description: Update AIX nim clients with an lpp_source
requirements: [ AIX ]
description:
    - Update (nim cust operation) a list of nim clients to the level of a
      given lpp_source. Clients already at the same or a higher level are
      skipped.
options:
    action:
        description: update the targets, or only check what would be done
        choices: [ update, check ]
        default: update
    lpp_source:
        description: lpp_source named YYYY-MM-DD-NNNN-lpp_source
        required: true
    targets:
        description: comma separated list of nim clients, '*' is a wildcard
        required: false
    async:
        description: update all targets with one asynchronous nim operation
        type: bool
        default: false
    nim_node:
        description: nim inventory already collected, read from the nim
                     master when not given
        required: false
"""

EXAMPLES = """
- name: update all quimby clients synchronously
  aix_nim_cust:
    lpp_source: 7100-03-05-1524-lpp_source
    targets: "quimby*,bart"

- name: update every nim client asynchronously
  aix_nim_cust:
    lpp_source: 7200-01-02-1717-lpp_source
    async: true
"""

# return codes, 0 means OK
ERR_INVENTORY = 1
ERR_LPP_SOURCE = 2
ERR_TARGETS = 3
ERR_CUST = 4

ERROR_KINDS = {
    ERR_INVENTORY: 'InventoryUnavailable',
    ERR_LPP_SOURCE: 'InvalidBundle',
    ERR_TARGETS: 'NoTargetsResolved',
    ERR_CUST: 'UpdateCommandFailed',
}

# classification of a nim cust operation output
CUST_SUCCESS = 'success'
CUST_NOOP = 'noop'
CUST_FAILURE = 'failure'

NIM_CMD = '/usr/sbin/nim'
C_RSH = '/usr/lpp/bos.sysmgt/nim/methods/c_rsh'

ALREADY_AT_LEVEL = 'Either the software is already at the same level as on the media, or'

LPP_SOURCE_RE = re.compile(r"^([0-9]{4}-[0-9]{2}-[0-9]{2}-[0-9]{4})-lpp_source$")
OSLEVEL_RE = re.compile(r"^([0-9]{4}-[0-9]{2}-[0-9]{2}-[0-9]{4})")
PROGRESS_RE = re.compile(r"^Filesets processed:.*?[0-9]+ of [0-9]+")
FINISHED_RE = re.compile(r"^Finished processing all filesets.")


# ----------------------------------------------------------------
# ----------------------------------------------------------------
class CustOutput(object):
    """
    Leveled messages of a customization run.

    Every message goes to the logger, info and above are also kept in
    lines to be returned in the module result.
    """

    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger(__name__)
        self.lines = []
        self._progress = False

    def _append(self, line):
        self.lines.append(line)
        self._progress = False

    def debug(self, msg):
        self.logger.debug(msg)

    def info(self, msg):
        self.logger.info(msg)
        self._append(msg)

    def warning(self, msg):
        self.logger.warning(msg)
        self._append(msg)

    def error(self, msg):
        self.logger.error(msg)
        self._append(msg)

    def progress(self, line):
        """Replace the previous progress line, if any, by this one"""
        self.logger.debug(line)
        if self._progress:
            self.lines[-1] = line
        else:
            self.lines.append(line)
        self._progress = True


# ----------------------------------------------------------------
# Inventory
# ----------------------------------------------------------------
def load_nim_node(snapshot):
    """
    Check a previously collected nim inventory.

    arguments:
        snapshot (dict): {'clients': {name: {'oslevel': str}},
                          'lpp_sources': {name: location}}

    return:
        ret code: 0 or ERR_INVENTORY
        the nim node or an error message
    """
    if not isinstance(snapshot, dict):
        return ERR_INVENTORY, 'NIM - Error: cannot read nim inventory'

    clients = snapshot.get('clients')
    if not isinstance(clients, dict):
        return ERR_INVENTORY, 'NIM - Error: cannot find nim clients in nim inventory'

    # a client listed without attributes has an unknown oslevel
    nim_clients = {}
    for (machine, attrs) in clients.items():
        if attrs is None:
            attrs = {}
        if not isinstance(attrs, dict):
            return ERR_INVENTORY, "NIM - Error: cannot read attributes of nim client '{}'"\
                                  .format(machine)
        nim_clients[machine] = attrs

    nim_node = {'clients': nim_clients,
                'lpp_sources': snapshot.get('lpp_sources') or {}}

    return 0, nim_node


def run_oslevel_cmd(run_command, machine, result):
    """
    Run command function, command to be 'threaded'.

    The thread then store the oslevel in the dedicated slot of the result
    dictionnary, empty if it cannot be read.
    """
    cmd = [C_RSH, machine, '/usr/bin/oslevel -s']

    try:
        ret, stdout, stderr = run_command(cmd)
    except OSError as exc:
        logging.warning('Cannot get oslevel of {}: {}'.format(machine, exc))
        result[machine] = ''
        return

    if ret != 0:
        logging.warning('Cannot get oslevel of {}: rc={} {}'
                        .format(machine, ret, stderr))
        result[machine] = ''
    else:
        result[machine] = stdout.strip()


def get_nim_objects(run_command, nim_type):
    """
    Get the nim objects of a given type with their attributes.

    arguments:
        run_command (callable): returns (rc, stdout, stderr)
        nim_type    (str): nim object type (standalone, lpp_source...)

    return:
        ret code: 0 or ERR_INVENTORY
        {name: {attribute: value}} or an error message
    """
    cmd = ['lsnim', '-t', nim_type, '-l']

    try:
        ret, stdout, stderr = run_command(cmd)
    except OSError as exc:
        return ERR_INVENTORY, 'Command: {} Exception.Args{}'.format(cmd, exc.args)

    if ret != 0:
        return ERR_INVENTORY, 'Command: {} failed with return code {} => Error :{}'\
                              .format(' '.join(cmd), ret, stderr)

    info_hash = {}
    obj_key = None
    for line in stdout.rstrip().split('\n'):
        line = line.rstrip()
        match_key = re.match(r"^(\S+):", line)
        if match_key:
            obj_key = match_key.group(1)
            info_hash[obj_key] = {}
            continue

        match_attr = re.match(r"^\s+(\S+)\s+=\s+(.*)$", line)
        if match_attr and obj_key is not None:
            info_hash[obj_key][match_attr.group(1)] = match_attr.group(2)

    return 0, info_hash


def build_nim_node(run_command):
    """
    Build the nim node from the nim master: the standalone clients with
    their Cstate and oslevel, and the lpp_sources with their location.

    return:
        ret code: 0 or ERR_INVENTORY
        the nim node or an error message
    """
    ret, lpp_sources = get_nim_objects(run_command, 'lpp_source')
    if ret != 0:
        return ret, 'NIM - Error getting the lpp_source list: {}'.format(lpp_sources)

    ret, standalones = get_nim_objects(run_command, 'standalone')
    if ret != 0:
        return ret, 'NIM - Error getting the nim clients: {}'.format(standalones)

    # =========================================================================
    # get the oslevel of each client
    # =========================================================================
    threads = []
    clients_oslevel = {}

    for machine in standalones:
        process = threading.Thread(target=run_oslevel_cmd,
                                   args=(run_command, machine, clients_oslevel))
        process.start()
        threads.append(process)

    for process in threads:
        process.join()

    clients = {}
    for (machine, attrs) in standalones.items():
        clients[machine] = {'cstate': attrs.get('Cstate', ''),
                            'oslevel': clients_oslevel.get(machine, '')}

    nim_node = {'clients': clients,
                'lpp_sources': dict((name, attrs.get('location', ''))
                                    for (name, attrs) in lpp_sources.items())}

    logging.debug('lpp source list: {}'.format(nim_node['lpp_sources']))
    logging.debug('NIM Clients: {}'.format(clients))

    return 0, nim_node


# ----------------------------------------------------------------
# Levels
# ----------------------------------------------------------------
def parse_lpp_source_level(lpp_source, nim_node):
    """
    Extract the oslevel from a known lpp_source name.

    return:
        ret code: 0 or ERR_LPP_SOURCE
        the oslevel (i.e. 7100-03-05-1524) or an error message
    """
    if not lpp_source or lpp_source not in nim_node['lpp_sources']:
        return ERR_LPP_SOURCE, "NIM - Error: cannot find lpp_source '{}' in nim inventory"\
                               .format(lpp_source)

    matched = LPP_SOURCE_RE.match(lpp_source)
    if not matched:
        return ERR_LPP_SOURCE, "NIM - Error: cannot get oslevel from lpp_source name '{}'"\
                               .format(lpp_source)

    return 0, matched.group(1)


def parse_client_level(oslevel):
    """
    Extract the comparable part of a client oslevel (oslevel -s output).

    return: the oslevel or None if it is not recognized
    """
    if not oslevel:
        return None
    matched = OSLEVEL_RE.match(oslevel.strip())
    if not matched:
        return None
    return matched.group(1)


def oslevel_value(oslevel):
    """Number formed by the digits of an oslevel"""
    return int(oslevel.replace('-', ''))


def compare_oslevel(oslevel1, oslevel2):
    """
    Compare two oslevels as the numbers formed by their digits.

    return: -1, 0 or 1 when oslevel1 is lower, equal or greater
    """
    val1 = oslevel_value(oslevel1)
    val2 = oslevel_value(oslevel2)
    if val1 < val2:
        return -1
    if val1 > val2:
        return 1
    return 0


# ----------------------------------------------------------------
# Targets
# ----------------------------------------------------------------
def expand_targets(targets, nim_clients, output):
    """
    Expand the list of the targets.

    targets is a comma separated list, a target could be of the form:
        target*       all the nim clients whose name starts with 'target',
                          '*' can be anywhere in the name
        target[n1:n2] where n1 and n2 are numeric: target<n1> to target<n2>
        ALL           all the nim clients (upper case only)
        client_name   the nim client named 'client_name'

        sample:  quimby[1:5],quimby12,other*

    An empty targets means all the nim clients.

    return:
        ret code: 0 or ERR_TARGETS
        the sorted list of the matching clients or an error message
    """
    if not targets or not targets.strip():
        output.warning('No targets specified, consider all nim standalone machines as targets')
        clients = set(nim_clients)

    else:
        clients = set()
        for target in targets.split(','):
            target = target.strip()
            if not target:
                continue

            # -----------------------------------------------------------
            # Build target(s) from: all
            # -----------------------------------------------------------
            if target == 'ALL':
                clients.update(nim_clients)
                continue

            # -----------------------------------------------------------
            # Build target(s) from: range i.e. quimby[7:12]
            # -----------------------------------------------------------
            rmatch = re.match(r"^(\w+)\[(\d+):(\d+)\]$", target)
            if rmatch:
                name = rmatch.group(1)
                start = int(rmatch.group(2))
                end = int(rmatch.group(3))

                for i in range(start, end + 1):
                    curr_name = name + str(i)
                    if curr_name in nim_clients:
                        clients.add(curr_name)
                continue

            # -----------------------------------------------------------
            # Build target(s) from: quimby*, *bart, quimby05
            # -----------------------------------------------------------
            pattern = '.*?'.join(re.escape(part) for part in target.split('*'))
            for curr_name in nim_clients:
                if re.match(r"^{}$".format(pattern), curr_name):
                    clients.add(curr_name)

    target_list = sorted(clients)
    output.debug('List of targets expanded to {}'.format(target_list))

    if not target_list:
        return ERR_TARGETS, "NIM - Error: no nim client matches targets '{}'"\
                            .format(targets)

    return 0, target_list


# ----------------------------------------------------------------
# Update
# ----------------------------------------------------------------
def classify_cust_output(ret, lines):
    """
    Classify the result of a nim cust operation.

    The software already at the media level is reported as an error by
    nim, it is not one for us.

    arguments:
        ret   (int): return code of the command
        lines (list): output lines to look into

    return: CUST_NOOP, CUST_SUCCESS or CUST_FAILURE
    """
    for line in lines:
        if ALREADY_AT_LEVEL in line:
            return CUST_NOOP
    if ret == 0:
        return CUST_SUCCESS
    return CUST_FAILURE


def build_cust_cmd(lpp_source, targets, async_mode=False):
    """
    Build the nim cust command for the given list of targets
    """
    cmd = [NIM_CMD, '-o', 'cust',
           '-a', 'lpp_source={}'.format(lpp_source),
           '-a', 'accept_licenses=yes',
           '-a', 'fixes=update_all']
    if async_mode:
        cmd += ['-a', 'async=yes']
    return cmd + list(targets)


def read_stream(stream, handler):
    """
    Read a process stream line by line until its end, stream reader to
    be 'threaded'.
    """
    for line in iter(stream.readline, ''):
        handler(line.rstrip('\n'))
    stream.close()


def perform_sync_customization(lpp_source, machine, output):
    """
    Perform a synchronous customization of a nim client, applying the
    given lpp_source.

    stdout and stderr are read while the command runs: progress lines are
    reported as they come, stderr lines are kept for the diagnostic.

    return:
        ret code: 0 or ERR_CUST
        the outcome {'success', 'skipped', 'diagnostic'} of the machine
    """
    cmd = build_cust_cmd(lpp_source, [machine])
    output.debug('NIM - Command:{}'.format(' '.join(cmd)))

    stderr_lines = []

    def on_stdout(line):
        if PROGRESS_RE.match(line) or FINISHED_RE.match(line):
            output.progress(line)
        else:
            output.debug('[STDOUT] {}'.format(line))

    def on_stderr(line):
        stderr_lines.append(line)
        output.debug('[STDERR] {}'.format(line))

    try:
        proc = subprocess.Popen(cmd, shell=False, stdin=subprocess.DEVNULL,
                                stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                                universal_newlines=True, errors='replace')
    except OSError as exc:
        msg = 'NIM - Error: cannot update {}: Command: {} Exception.Args{}'\
              .format(machine, ' '.join(cmd), exc.args)
        output.error(msg)
        return ERR_CUST, {'success': False, 'skipped': False, 'diagnostic': msg}

    readers = [threading.Thread(target=read_stream, args=(proc.stdout, on_stdout)),
               threading.Thread(target=read_stream, args=(proc.stderr, on_stderr))]
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()
    ret = proc.wait()

    output.debug('[RC] {}'.format(ret))
    for line in stderr_lines:
        output.info(line)

    status = classify_cust_output(ret, stderr_lines)
    if status == CUST_NOOP:
        output.info('NIM - {} is already at the level of {}'.format(machine, lpp_source))
        return 0, {'success': True, 'skipped': True,
                   'diagnostic': ALREADY_AT_LEVEL}

    if status == CUST_FAILURE:
        msg = 'NIM - Error: cannot update {} to {}, command {} failed with return code {}'\
              .format(machine, lpp_source, ' '.join(cmd), ret)
        output.error(msg)
        return ERR_CUST, {'success': False, 'skipped': False,
                          'diagnostic': '{}\n{}'.format(msg, '\n'.join(stderr_lines)).rstrip()}

    output.info('NIM - Finish updating {}.'.format(machine))
    return 0, {'success': True, 'skipped': False,
               'diagnostic': 'updated to {}'.format(lpp_source)}


def perform_async_customization(run_command, lpp_source, target_list, output):
    """
    Perform an asynchronous customization of the given targets clients,
    applying the given lpp_source with one nim operation.

    return:
        ret code: 0 or ERR_CUST
        the outcome {'success', 'skipped', 'diagnostic'} of the batch
    """
    cmd = build_cust_cmd(lpp_source, target_list, async_mode=True)
    output.debug('NIM - Command:{}'.format(' '.join(cmd)))

    try:
        ret, stdout, stderr = run_command(cmd)
    except OSError as exc:
        msg = 'NIM - Error: cannot update {}: Command: {} Exception.Args{}'\
              .format(' '.join(target_list), ' '.join(cmd), exc.args)
        output.error(msg)
        return ERR_CUST, {'success': False, 'skipped': False, 'diagnostic': msg}

    output.debug('[RC] {}'.format(ret))
    output.debug('[STDOUT] {}'.format(stdout))
    output.debug('[STDERR] {}'.format(stderr))

    lines = stdout.splitlines() + stderr.splitlines()
    status = classify_cust_output(ret, lines)
    if status == CUST_NOOP:
        output.info('NIM - {} already at the level of {}'
                    .format(' '.join(target_list), lpp_source))
        return 0, {'success': True, 'skipped': True,
                   'diagnostic': ALREADY_AT_LEVEL}

    if status == CUST_FAILURE:
        msg = 'NIM - Error: cannot update {} to {}, command {} failed with return code {}'\
              .format(' '.join(target_list), lpp_source, ' '.join(cmd), ret)
        output.error(msg)
        return ERR_CUST, {'success': False, 'skipped': False,
                          'diagnostic': '{}\n{}'.format(msg, stderr).rstrip()}

    output.info('NIM - Finish updating {} asynchronously.'.format(' '.join(target_list)))
    return 0, {'success': True, 'skipped': False,
               'diagnostic': 'update to {} started'.format(lpp_source)}


# ----------------------------------------------------------------
# Orchestration
# ----------------------------------------------------------------
def print_node_by_columns(rows):
    """
    Build an array with the oslevel and the plan of each target

    arguments:
        rows (list): (machine, oslevel, plan) tuples

    return: the strings array
    """

    # -----------------------------------------------------------------
    # Print node in column format
    #
    #    +---------+-----------------+-----------------------------+
    #    | machine |     oslevel     |            plan             |
    #    +---------+-----------------+-----------------------------+
    #    | client1 | 7100-01-04-1216 | update to 7100-03-05-1524   |
    #    | client2 | 7100-03-05-1524 | already at same or higher   |
    #    +---------+-----------------+-----------------------------+
    #
    headers = ('machine', 'oslevel', 'plan')
    widths = [len(header) for header in headers]

    for row in rows:
        for (i, col) in enumerate(row):
            widths[i] = max(widths[i], len(col))
    widths = [width + 2 for width in widths]

    sep = '+' + '+'.join('-' * width for width in widths) + '+'

    def line(cols):
        return '|' + '|'.join('{0:^{1}}'.format(col, width)
                              for (col, width) in zip(cols, widths)) + '|'

    result = [sep, line(headers), sep]
    for row in rows:
        result.append(line(row))
    result.append(sep)

    return result


def nim_cust(nim_node, lpp_source, targets, async_mode, run_command, output,
             check_only=False):
    """
    Update nim clients (targets) with a specified lpp_source

    In synchronous mode the clients are updated one after the other, the
    ones already at the same or a higher level are skipped, the first
    failure stops the loop. In asynchronous mode one nim operation
    updates all the clients without looking at their level.

    With check_only nothing is updated, the plan is reported.

    return:
        ret code: 0 or the error of the first failing step
        report {'msg', 'targets', 'outcomes', 'changed'}
    """
    report = {'msg': '', 'targets': [], 'outcomes': OrderedDict(), 'changed': False}

    # get targetted oslevel
    ret, oslevel = parse_lpp_source_level(lpp_source, nim_node)
    if ret != 0:
        output.error(oslevel)
        report['msg'] = oslevel
        return ret, report
    output.debug('NIM - lpp_source {} oslevel: {}'.format(lpp_source, oslevel))

    # build list of targets
    ret, target_list = expand_targets(targets, nim_node['clients'], output)
    if ret != 0:
        output.error(target_list)
        report['msg'] = target_list
        return ret, report
    report['targets'] = target_list

    outcomes = report['outcomes']

    if async_mode:
        if check_only:
            output.info('NIM - would update {} to {} asynchronously'
                        .format(' '.join(target_list), lpp_source))
            for line in print_node_by_columns(
                    [(m, nim_node['clients'][m].get('oslevel') or '', 'update to {}'.format(oslevel))
                     for m in target_list]):
                output.info(line)
            report['msg'] = 'NIM check completed successfully'
            return 0, report

        output.warning("Start updating machines '{}' to {}."
                       .format(' '.join(target_list), lpp_source))
        ret, outcome = perform_async_customization(run_command, lpp_source,
                                                   target_list, output)
        for machine in target_list:
            outcomes[machine] = outcome
        if ret != 0:
            report['msg'] = outcome['diagnostic']
            return ret, report
        report['changed'] = not outcome['skipped']
        report['msg'] = 'NIM update completed successfully'
        return 0, report

    rows = []
    for machine in target_list:
        current = nim_node['clients'][machine].get('oslevel') or ''
        cur_oslevel = parse_client_level(current)

        if cur_oslevel is None:
            msg = 'Cannot get oslevel for machine {}'.format(machine)
            output.warning(msg)
            outcomes[machine] = {'success': True, 'skipped': True, 'diagnostic': msg}
            rows.append((machine, current, 'unknown oslevel, skipped'))
            continue

        if compare_oslevel(cur_oslevel, oslevel) >= 0:
            msg = 'Machine {} is already at same or higher level than {}'\
                  .format(machine, oslevel)
            output.warning(msg)
            outcomes[machine] = {'success': True, 'skipped': True, 'diagnostic': msg}
            rows.append((machine, current, 'already at same or higher level'))
            continue

        if check_only:
            msg = 'Machine {} would be updated from {} to {}'\
                  .format(machine, cur_oslevel, oslevel)
            output.info(msg)
            outcomes[machine] = {'success': True, 'skipped': False, 'diagnostic': msg}
            rows.append((machine, current, 'update to {}'.format(oslevel)))
            continue

        output.warning('Start updating machine {} from {} to {}.'
                       .format(machine, cur_oslevel, lpp_source))
        ret, outcome = perform_sync_customization(lpp_source, machine, output)
        outcomes[machine] = outcome
        if ret != 0:
            report['msg'] = outcome['diagnostic']
            return ret, report
        if not outcome['skipped']:
            report['changed'] = True

    if check_only:
        for line in print_node_by_columns(rows):
            output.info(line)
        report['msg'] = 'NIM check completed successfully'
    else:
        report['msg'] = 'NIM update completed successfully'

    return 0, report


################################################################################

def main():

    module = AnsibleModule(
        argument_spec={
            'description': dict(required=False, type='str', aliases=['desc']),
            'action': dict(choices=['update', 'check'], default='update', type='str'),
            'lpp_source': dict(required=True, type='str'),
            'targets': dict(required=False, type='str'),
            'async': dict(required=False, default=False, type='bool'),
            'nim_node': dict(required=False, type='dict'),
        },
        supports_check_mode=True
    )

    # Open log file
    logging.basicConfig(filename='/tmp/ansible_nim_cust_debug.log',
                        format='[%(asctime)s] %(levelname)s: [%(funcName)s:%(thread)d] %(message)s',
                        level=logging.DEBUG)
    logging.debug('*** START ***')

    output = CustOutput(logging.getLogger('aix_nim_cust'))

    # =========================================================================
    # Get Module params
    # =========================================================================
    action = module.params['action']
    lpp_source = module.params['lpp_source']
    targets = module.params['targets']
    async_mode = module.params['async']

    if module.params['description']:
        description = module.params['description']
    else:
        description = 'NIM customization: {} request'.format(action)

    output.debug('desc="{}"'.format(description))
    output.debug('lpp_source={}'.format(lpp_source))
    output.debug('targets={}'.format(targets))
    output.debug('async={}'.format(async_mode))

    # =========================================================================
    # build nim node info
    # =========================================================================
    if module.params['nim_node'] is not None:
        ret, nim_node = load_nim_node(module.params['nim_node'])
    else:
        ret, nim_node = build_nim_node(module.run_command)

    if ret != 0:
        output.error(nim_node)
        module.fail_json(msg=nim_node, error=ERROR_KINDS[ret],
                         nim_output=output.lines)

    check_only = action == 'check' or module.check_mode

    ret, report = nim_cust(nim_node, lpp_source, targets, async_mode,
                           module.run_command, output, check_only=check_only)

    if ret != 0:
        module.fail_json(msg=report['msg'], error=ERROR_KINDS[ret],
                         targets=report['targets'], outcomes=report['outcomes'],
                         nim_output=output.lines)

    # ==========================================================================
    # Exit
    # ==========================================================================
    module.exit_json(
        changed=report['changed'],
        msg=report['msg'],
        targets=report['targets'],
        outcomes=report['outcomes'],
        nim_output=output.lines)


if __name__ == '__main__':
    main()
