"""Lua scripts evaluated by Redis.

Each script runs as one atomic unit on the server, so a logical
operation never needs more than one round trip.
"""

# KEYS[1] = counter key
# ARGV[1] = limit, ARGV[2] = window seconds, ARGV[3] = block at limit (0/1)
# Returns {blocked, remaining, resets_in_seconds}
THROTTLE = """
local key = KEYS[1]
local limit = tonumber(ARGV[1])
local window = tonumber(ARGV[2])
local block_at_limit = ARGV[3] == "1"

local count = redis.call('INCR', key)
local ttl = redis.call('TTL', key)

-- Arm the window on the first hit, re-arm a counter that lost its expiry
if count == 1 or ttl == -1 then
  redis.call('EXPIRE', key, window)
end

if ttl == -1 then
  ttl = window
end

local remaining = limit - count

if count > limit then
  return {1, 0, ttl}
end

if block_at_limit and remaining == 0 and count > 1 then
  return {1, 0, ttl}
end

return {0, remaining, ttl}
"""

# KEYS[1] = collection hash
# ARGV[1] = limit (0 = everything), ARGV[2] = cursor, ARGV[3] = page size
# Returns {{field, value, field, value, ...}, next_cursor}
STORAGE_LIST = """
local storage_key = KEYS[1]
local limit = tonumber(ARGV[1]) or 0
local cursor = ARGV[2] or "0"
local page_size = tonumber(ARGV[3]) or 1000
local entries = {}

local function scan(count)
  local result = redis.call('HSCAN', storage_key, cursor, 'COUNT', count)
  for _, item in ipairs(result[2]) do
    entries[#entries + 1] = item
  end
  return tostring(result[1])
end

if limit == 0 then
  repeat
    cursor = scan(page_size)
  until tonumber(cursor) == 0
else
  cursor = scan(limit)
end

return {entries, cursor}
"""

# ARGV[1] = MATCH pattern, ARGV[2] = SCAN count
# Returns the number of unlinked keys
DELETE_BY_PATTERN = """
local cursor = "0"
local deleted = 0
repeat
  local result = redis.call('SCAN', cursor, 'MATCH', ARGV[1], 'COUNT', ARGV[2])
  for _, key in ipairs(result[2]) do
    redis.call('UNLINK', key)
    deleted = deleted + 1
  end
  cursor = tostring(result[1])
until tonumber(cursor) == 0
return deleted
"""
